"""Swift target: UIKit / AppKit views and Swift tokens."""

import json
from pathlib import Path

from core.tokens.colors import parse_color_value
from core.naming import camel_case, pascal_case
from plugins.base import TargetPlugin, format_number
from plugins.swift.component import FRAMEWORKS, SwiftComponentRenderer

FONT_WEIGHTS = {
    "100": ".ultraLight",
    "200": ".thin",
    "300": ".light",
    "400": ".regular",
    "500": ".medium",
    "600": ".semibold",
    "700": ".bold",
    "800": ".heavy",
    "900": ".black",
}


def color_literal(rgba) -> str:
    return (
        f"#colorLiteral(red: {format_number(rgba.red)}, green: {format_number(rgba.green)}, "
        f"blue: {format_number(rgba.blue)}, alpha: {format_number(rgba.alpha)})"
    )


class SwiftTarget(TargetPlugin):
    """UIKit and AppKit output."""

    def __init__(self):
        manifest_path = Path(__file__).parent / "manifest.yaml"
        super().__init__(manifest_path)

    def _module(self, context) -> str:
        return FRAMEWORKS[context.framework or self.manifest.default_framework]["module"]

    def render_colors(self, context, colors) -> str:
        entries = [
            {"id": color.id, "comment": color.comment, "literal": color_literal(color.rgba)}
            for color in colors
        ]
        return self.render_template("colors.swift.j2", module=self._module(context), colors=entries)

    def render_text_styles(self, context, colors, text_styles) -> str:
        styles = []
        for style in text_styles:
            arguments = []
            if style.font_family is not None:
                arguments.append(f"family: {json.dumps(style.font_family)}")
            if style.font_weight is not None:
                arguments.append(f"weight: {FONT_WEIGHTS[style.font_weight]}")
            if style.font_size is not None:
                arguments.append(f"size: {format_number(style.font_size)}")
            if style.line_height is not None:
                arguments.append(f"lineHeight: {format_number(style.line_height)}")
            if style.letter_spacing is not None:
                arguments.append(f"kerning: {format_number(style.letter_spacing)}")
            if style.color is not None:
                reference = style.color_reference(colors)
                if reference is not None:
                    arguments.append(f"color: Colors.{camel_case(reference)}")
                else:
                    arguments.append(f"color: {color_literal(parse_color_value(style.color))}")
            styles.append({"key": camel_case(style.id), "arguments": arguments})

        default_style = None
        if text_styles.default_style is not None:
            default_style = f"TextStyles.{camel_case(text_styles.default_style.id)}"

        return self.render_template(
            "text_styles.swift.j2",
            module=self._module(context),
            styles=styles,
            default_style=default_style,
        )

    def render_component(self, context, name, colors, text_styles, lookup, document) -> str:
        renderer = SwiftComponentRenderer(
            context.framework or self.manifest.default_framework,
            colors,
            text_styles,
            lookup,
            document,
        )
        template_context = renderer.build()
        return self.render_template("component.swift.j2", class_name=pascal_case(name), **template_context)
