"""JavaScript target: React components and ES module tokens."""

import json
from pathlib import Path
from typing import List

from core.naming import camel_case, pascal_case
from plugins.base import TargetPlugin, format_number
from plugins.javascript.component import JavaScriptComponentRenderer


class JavaScriptTarget(TargetPlugin):
    """React (native, DOM, sketchapp) output."""

    def __init__(self):
        manifest_path = Path(__file__).parent / "manifest.yaml"
        super().__init__(manifest_path)

    def render_colors(self, context, colors) -> str:
        return self.render_template("colors.js.j2", colors=list(colors))

    def render_text_styles(self, context, colors, text_styles) -> str:
        uses_colors = False
        styles = []
        for style in text_styles:
            entries: List[str] = []
            if style.font_family is not None:
                entries.append(f"fontFamily: {json.dumps(style.font_family)}")
            if style.font_weight is not None:
                entries.append(f"fontWeight: {json.dumps(style.font_weight)}")
            for key, value in (
                ("fontSize", style.font_size),
                ("lineHeight", style.line_height),
                ("letterSpacing", style.letter_spacing),
            ):
                if value is not None:
                    entries.append(f"{key}: {format_number(value)}")
            if style.text_transform is not None:
                entries.append(f"textTransform: {json.dumps(style.text_transform)}")
            if style.color is not None:
                reference = style.color_reference(colors)
                if reference is not None:
                    uses_colors = True
                    entries.append(f"color: colors.{camel_case(reference)}")
                else:
                    entries.append(f"color: {json.dumps(style.color)}")
            styles.append({"key": camel_case(style.id), "entries": entries})

        return self.render_template(
            "text_styles.js.j2",
            styles=styles,
            uses_colors=uses_colors,
            colors_module=self.manifest.colors_file,
        )

    def render_component(self, context, name, colors, text_styles, lookup, document) -> str:
        renderer = JavaScriptComponentRenderer(
            context.framework or self.manifest.default_framework,
            colors,
            text_styles,
            lookup,
            document,
            colors_module=self.manifest.colors_file,
            text_styles_module=self.manifest.text_styles_file,
        )
        template_context = renderer.build()
        template_context["class_name"] = pascal_case(name)
        return self.render_template("component.js.j2", **template_context)