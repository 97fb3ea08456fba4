"""XML target: Android color resources."""

import re
from pathlib import Path

from plugins.base import TargetPlugin


def resource_name(color_id: str) -> str:
    """Android resource names are lowercase snake_case."""
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', color_id)
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1)
    return re.sub('[^a-z0-9]+', '_', s2.lower()).strip('_')


def android_color(rgba) -> str:
    """#AARRGGBB, or #RRGGBB when opaque."""
    channels = [round(c * 255) for c in (rgba.red, rgba.green, rgba.blue)]
    if rgba.alpha < 1.0:
        channels.insert(0, round(rgba.alpha * 255))
    return '#' + ''.join(f"{c:02X}" for c in channels)


class XmlTarget(TargetPlugin):
    """Colors only; text styles render empty and components are unsupported."""

    def __init__(self):
        manifest_path = Path(__file__).parent / "manifest.yaml"
        super().__init__(manifest_path)

    def render_colors(self, context, colors) -> str:
        entries = [
            {
                "name": resource_name(color.id),
                "value": android_color(color.rgba),
                "comment": color.comment.replace("--", "- -"),
            }
            for color in colors
        ]
        return self.render_template("colors.xml.j2", colors=entries)
