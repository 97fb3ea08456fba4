# plugins/swift/component.py
"""UIKit / AppKit rendering of component documents."""

import json
from typing import Any, Dict, List

from core.components.document import (
    AssignExpr,
    ComponentDocument,
    Expression,
    IdentifierExpr,
    IfExpr,
    Layer,
    LitExpr,
)
from core.errors import RenderError, UnknownParameterError
from core.naming import camel_case, pascal_case
from core.tokens.colors import ColorSet
from core.tokens.text_styles import TextStyleSet
from plugins.base import format_number
from plugins.common import (
    asset_name,
    check_component_arguments,
    resolve_color,
    resolve_text_style,
    value_kind,
)

FRAMEWORKS: Dict[str, Dict[str, Any]] = {
    "uikit": {
        "module": "UIKit",
        "base_class": "UIView",
        "color_class": "UIColor",
        "image_class": "UIImage",
        "views": {"View": "UIView(frame: .zero)", "Text": "UILabel()", "Image": "UIImageView()"},
    },
    "appkit": {
        "module": "AppKit",
        "base_class": "NSView",
        "color_class": "NSColor",
        "image_class": "NSImage",
        "views": {"View": "NSBox()", "Text": "NSTextField(labelWithString: \"\")", "Image": "NSImageView()"},
    },
}

RESIZE_MODES = {
    "uikit": {
        "cover": ".scaleAspectFill",
        "contain": ".scaleAspectFit",
        "stretch": ".scaleToFill",
        "center": ".center",
    },
    "appkit": {
        "cover": ".scaleProportionallyUpOrDown",
        "contain": ".scaleProportionallyUpOrDown",
        "stretch": ".scaleAxesIndependently",
        "center": ".scaleNone",
    },
}

# Flexbox properties have no counterpart without a layout engine
LAYOUT_ONLY_PROPERTIES = {
    "flexDirection", "alignItems", "justifyContent", "flex",
    "padding", "paddingTop", "paddingRight", "paddingBottom", "paddingLeft",
    "margin", "marginTop", "marginRight", "marginBottom", "marginLeft",
}

# Properties that are only set once, in setUpViews()
STATIC_ONLY_PROPERTIES = {"width", "height", "resizeMode", "font"}


class SwiftComponentRenderer:
    """Builds the template context for one UIView / NSView subclass."""

    def __init__(
        self,
        framework: str,
        colors: ColorSet,
        text_styles: TextStyleSet,
        lookup,
        document: ComponentDocument,
    ):
        self.framework_name = framework
        self.framework = FRAMEWORKS[framework]
        self.colors = colors
        self.text_styles = text_styles
        self.lookup = lookup
        self.document = document

    def build(self) -> Dict[str, Any]:
        parameters = [
            {"name": p.name, "type": self._swift_type(p.type)} for p in self.document.parameters
        ]
        views = []
        for layer in self.document.layers()[1:]:
            views.append({"name": self.view_name(layer), "initializer": self._initializer(layer)})

        setup = self._hierarchy(self.document.root)
        setup.extend(self._constraints())
        for layer in self.document.layers():
            setup.extend(self._static_properties(layer))

        return {
            "module": self.framework["module"],
            "base_class": self.framework["base_class"],
            "init_arguments": [f"{p['name']}: {p['type']}" for p in parameters],
            "parameters": parameters,
            "views": views,
            "setup": setup,
            "update": self._statements(self.document.logic),
        }

    def view_name(self, layer: Layer) -> str:
        if layer is self.document.root:
            return "self"
        return f"{camel_case(layer.id)}View"

    def _swift_type(self, parameter_type: str) -> str:
        return {
            "String": "String",
            "Boolean": "Bool",
            "Number": "CGFloat",
            "Color": self.framework["color_class"],
            "URL": f"{self.framework['image_class']}?",
        }[parameter_type]

    # Views

    def _initializer(self, layer: Layer) -> str:
        if layer.is_builtin:
            return self.framework["views"][layer.type]
        if layer.children:
            raise RenderError(f"Component layer '{layer.id}' cannot have children")

        sibling = self.lookup(layer.type)
        check_component_arguments(layer, sibling)
        arguments = []
        for parameter in sibling.parameters:
            if parameter.name in layer.parameters:
                value = self._value(layer, parameter.name, layer.parameters[parameter.name])
            elif parameter.default is not None:
                value = self._value(layer, parameter.name, parameter.default)
            else:
                value = self._zero_value(parameter.type)
            arguments.append(f"{parameter.name}: {value}")
        return f"{pascal_case(layer.type)}({', '.join(arguments)})"

    def _zero_value(self, parameter_type: str) -> str:
        return {
            "String": '""',
            "Boolean": "false",
            "Number": "0",
            "Color": f"{self.framework['color_class']}.clear",
            "URL": "nil",
        }[parameter_type]

    def _hierarchy(self, layer: Layer) -> List[str]:
        lines = []
        if layer.children and not layer.is_builtin:
            raise RenderError(f"Component layer '{layer.id}' cannot have children")
        if layer.children and layer.type != "View":
            raise RenderError(f"{layer.type} layer '{layer.id}' cannot have children")
        for child in layer.children:
            if layer is self.document.root:
                lines.append(f"addSubview({self.view_name(child)})")
            else:
                lines.append(f"{self.view_name(layer)}.addSubview({self.view_name(child)})")
        for child in layer.children:
            lines.extend(self._hierarchy(child))
        return lines

    def _constraints(self) -> List[str]:
        lines = []
        for layer in self.document.layers():
            sizes = [p for p in ("width", "height") if p in layer.parameters]
            if not sizes:
                continue
            view = self.view_name(layer)
            target = "" if view == "self" else f"{view}."
            lines.append(f"{target}translatesAutoresizingMaskIntoConstraints = false")
            for prop in sizes:
                value = self._value(layer, prop, layer.parameters[prop])
                lines.append(f"{target}{prop}Anchor.constraint(equalToConstant: {value}).isActive = true")
        return lines

    # Properties

    def _static_properties(self, layer: Layer) -> List[str]:
        lines = []
        if self._is_box(layer):
            view = self.view_name(layer)
            lines.extend([
                f"{view}.boxType = .custom",
                f"{view}.borderType = .noBorder",
                f"{view}.contentViewMargins = .zero",
            ])
        for prop, value in layer.parameters.items():
            if prop in ("width", "height") or prop in LAYOUT_ONLY_PROPERTIES:
                continue
            if not layer.is_builtin:
                # Passed through the initializer
                continue
            lines.extend(self._setter(layer, prop, self._value(layer, prop, value)))
        return lines

    def _is_box(self, layer: Layer) -> bool:
        return self.framework_name == "appkit" and layer.type == "View" and layer is not self.document.root

    def _uses_layer(self, layer: Layer) -> bool:
        return self.framework_name == "appkit" and not self._is_box(layer)

    def _setter(self, layer: Layer, prop: str, value: str) -> List[str]:
        view = self.view_name(layer)
        target = "" if view == "self" else f"{view}."

        if not layer.is_builtin:
            return [f"{target}{prop} = {value}"]
        if prop in LAYOUT_ONLY_PROPERTIES:
            return []
        if prop == "font":
            return [f"{value}.apply(to: {view})"]
        if prop == "resizeMode":
            mode = RESIZE_MODES[self.framework_name].get(json.loads(value) if value.startswith('"') else value)
            if mode is None:
                raise RenderError(f"Unsupported resize mode {value} on layer '{layer.id}'")
            if self.framework_name == "uikit":
                return [f"{target}contentMode = {mode}"]
            return [f"{target}imageScaling = {mode}"]
        if prop == "visible":
            return [f"{target}isHidden = !{value}"]
        if prop == "opacity":
            return [f"{target}{'alpha' if self.framework_name == 'uikit' else 'alphaValue'} = {value}"]
        if prop == "text":
            return [f"{target}{'text' if self.framework_name == 'uikit' else 'stringValue'} = {value}"]
        if prop == "color":
            return [f"{target}textColor = {value}"]
        if prop == "numberOfLines":
            return [f"{target}{'numberOfLines' if self.framework_name == 'uikit' else 'maximumNumberOfLines'} = {value}"]
        if prop == "image":
            return [f"{target}image = {value}"]

        if self._is_box(layer):
            box_properties = {
                "backgroundColor": "fillColor",
                "borderColor": "borderColor",
                "borderWidth": "borderWidth",
                "borderRadius": "cornerRadius",
            }
            return [f"{target}{box_properties[prop]} = {value}"]

        cg_value = f"{value}.cgColor" if prop in ("backgroundColor", "borderColor") else value
        if self._uses_layer(layer):
            layer_properties = {
                "backgroundColor": "backgroundColor",
                "borderColor": "borderColor",
                "borderWidth": "borderWidth",
                "borderRadius": "cornerRadius",
            }
            return [f"{target}wantsLayer = true", f"{target}layer?.{layer_properties[prop]} = {cg_value}"]

        if prop == "backgroundColor":
            return [f"{target}backgroundColor = {value}"]
        layer_properties = {
            "borderColor": "borderColor",
            "borderWidth": "borderWidth",
            "borderRadius": "cornerRadius",
        }
        return [f"{target}layer.{layer_properties[prop]} = {cg_value}"]

    def _getter(self, layer: Layer, prop: str) -> str:
        view = self.view_name(layer)
        if not layer.is_builtin:
            return f"{view}.{prop}"
        uikit = self.framework_name == "uikit"
        getters = {
            "text": "text" if uikit else "stringValue",
            "color": "textColor",
            "image": "image",
            "opacity": "alpha" if uikit else "alphaValue",
        }
        if prop == "visible":
            return f"!{view}.isHidden"
        if prop == "backgroundColor" and uikit:
            return f"{view}.backgroundColor"
        if prop == "backgroundColor" and self._is_box(layer):
            return f"{view}.fillColor"
        if prop not in getters:
            raise RenderError(f"Cannot read '{prop}' of layer '{layer.id}' in Swift")
        return f"{view}.{getters[prop]}"

    # Logic

    def _statements(self, expressions, depth: int = 0) -> List[str]:
        indent = "  " * depth
        lines = []
        for expr in expressions:
            if isinstance(expr, AssignExpr):
                _, layer_id, prop = expr.assignee.path
                layer = self.document.find_layer(layer_id)
                if prop in STATIC_ONLY_PROPERTIES:
                    raise RenderError(f"'{prop}' of layer '{layer_id}' cannot be assigned in logic for Swift")
                if not layer.is_builtin and self.lookup(layer.type).parameter(prop) is None:
                    raise UnknownParameterError(f"{layer_id}.{prop}", layer.type)
                content = self._expression(expr.content, layer, prop)
                lines.extend(f"{indent}{line}" for line in self._setter(layer, prop, content))
            elif isinstance(expr, IfExpr):
                lines.append(f"{indent}if {self._expression(expr.condition)} {{")
                lines.extend(self._statements(expr.body, depth + 1))
                lines.append(f"{indent}}}")
        return lines

    def _expression(self, expr: Expression, layer: Layer = None, prop: str = None) -> str:
        if isinstance(expr, IdentifierExpr):
            if expr.is_parameter:
                return expr.path[1]
            return self._getter(self.document.find_layer(expr.path[1]), expr.path[2])
        if isinstance(expr, LitExpr):
            if layer is not None:
                return self._value(layer, prop, expr.value)
            return self._literal(expr.value)
        raise RenderError(f"{type(expr).__name__} cannot be used as a value")

    def _value(self, layer: Layer, prop: str, value: Any) -> str:
        kind = value_kind(layer, prop, self.lookup)
        if kind == "color":
            token, rgba = resolve_color(value, self.colors)
            if token is not None:
                return f"Colors.{camel_case(token)}"
            return (
                f"{self.framework['color_class']}(red: {format_number(rgba.red)}, "
                f"green: {format_number(rgba.green)}, blue: {format_number(rgba.blue)}, "
                f"alpha: {format_number(rgba.alpha)})"
            )
        if kind == "font":
            return f"TextStyles.{camel_case(resolve_text_style(value, self.text_styles).id)}"
        if kind == "image":
            return f'#imageLiteral(resourceName: "{asset_name(value)}")'
        return self._literal(value)

    @staticmethod
    def _literal(value: Any) -> str:
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return format_number(value)
        if isinstance(value, str):
            return json.dumps(value)
        raise RenderError(f"Unsupported literal {value!r}")
