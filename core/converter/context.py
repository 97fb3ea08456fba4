# core/converter/context.py
from dataclasses import dataclass
from typing import Optional

from core.errors import UnknownFrameworkError
from plugins.base import TargetPlugin
from plugins.registry import TargetRegistry, target_registry


@dataclass(frozen=True)
class ConversionContext:
    """Target and per-target options for one invocation."""
    target: TargetPlugin
    framework: Optional[str] = None

    @classmethod
    def create(
        cls,
        target: str,
        framework: Optional[str] = None,
        registry: Optional[TargetRegistry] = None,
    ) -> "ConversionContext":
        """Resolve ``target`` and ``framework``; raises before any file I/O."""
        plugin = (registry or target_registry).get(target)
        frameworks = plugin.manifest.frameworks
        if framework is None:
            framework = plugin.manifest.default_framework
        elif framework.lower() not in frameworks:
            raise UnknownFrameworkError(plugin.name, framework, frameworks)
        else:
            framework = framework.lower()
        return cls(target=plugin, framework=framework)

    @property
    def target_name(self) -> str:
        return self.target.name
