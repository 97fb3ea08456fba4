"""
Pytest configuration and fixtures for the Lona converter.
"""

import json
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest


COLORS = {
    "colors": [
        {"id": "primary", "name": "Primary", "value": "#1A2B3C", "comment": "Brand"},
        {"id": "white", "name": "White", "value": "#FFFFFF"},
    ]
}

TEXT_STYLES = {
    "styles": [
        {
            "id": "heading1",
            "name": "Heading 1",
            "fontFamily": "Helvetica",
            "fontWeight": "700",
            "fontSize": 24,
            "lineHeight": 32,
            "color": "primary",
        },
        {"id": "body", "name": "Body", "fontSize": 14},
    ],
    "defaultStyleName": "body",
}

BUTTON = {
    "params": [
        {"name": "title", "type": "String"},
        {"name": "enabled", "type": "Boolean"},
    ],
    "root": {
        "id": "Container",
        "type": "Lona:View",
        "parameters": {"backgroundColor": "primary", "padding": 8},
        "children": [
            {"id": "Title", "type": "Lona:Text", "parameters": {"font": "heading1", "text": "Hello"}},
        ],
    },
    "logic": [
        {
            "type": "AssignExpr",
            "assignee": ["layers", "Title", "text"],
            "content": ["parameters", "title"],
        },
        {
            "type": "IfExpr",
            "condition": ["parameters", "enabled"],
            "body": [
                {
                    "type": "AssignExpr",
                    "assignee": ["layers", "Container", "backgroundColor"],
                    "content": {"type": "LitExpr", "value": "white"},
                },
            ],
        },
    ],
}

CARD = {
    "params": [{"name": "label", "type": "String"}],
    "root": {
        "id": "Card",
        "type": "View",
        "children": [
            {"id": "Action", "type": "Button", "parameters": {"title": "Go"}},
            {
                "id": "Thumb",
                "type": "Image",
                "parameters": {"image": "file://./assets/icon.png", "width": 20, "height": 20},
            },
        ],
    },
    "logic": [
        {
            "type": "AssignExpr",
            "assignee": ["layers", "Action", "title"],
            "content": ["parameters", "label"],
        },
    ],
}


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def workspace_dir(tmp_path):
    """Sample workspace: tokens, a top-level Button, a nested Card and one asset."""
    root = tmp_path / "workspace"
    write_json(root / "colors.json", COLORS)
    write_json(root / "textStyles.json", TEXT_STYLES)
    write_json(root / "Button.component", BUTTON)
    write_json(root / "nested" / "Card.component", CARD)
    icon = root / "nested" / "assets" / "icon.png"
    icon.parent.mkdir(parents=True, exist_ok=True)
    icon.write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return root


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "out"
