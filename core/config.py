# core/config.py
import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import WorkspaceConfigError


class Settings(BaseSettings):
    app_name: str = "Lona Converter"

    # Workspace layout
    colors_file: str = Field(default="colors.json")
    text_styles_file: str = Field(default="textStyles.json")
    component_extension: str = Field(default=".component")
    asset_extensions: List[str] = Field(default_factory=lambda: [".png"])
    workspace_config_file: str = Field(default="lona.json")

    # Directories never descended into during discovery
    ignore: List[str] = Field(default_factory=lambda: ["node_modules"])

    model_config = SettingsConfigDict(
        env_prefix="LONA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class WorkspaceConfig(BaseModel):
    """Options read from the workspace's own config file."""
    ignore: List[str] = Field(default_factory=list)

    @classmethod
    def load(cls, root: Path, settings: Optional[Settings] = None) -> "WorkspaceConfig":
        settings = settings or get_settings()
        path = root / settings.workspace_config_file
        if not path.is_file():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return cls.model_validate(data)
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            raise WorkspaceConfigError(path, str(e))


@lru_cache()
def get_settings() -> Settings:
    return Settings()
