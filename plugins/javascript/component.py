# plugins/javascript/component.py
"""React rendering of component documents."""

import json
from typing import Any, Dict, List, Set, Tuple

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
from core.workspace import relative_import
from plugins.common import (
    asset_path,
    check_component_arguments,
    resolve_color,
    resolve_text_style,
    value_kind,
)

FRAMEWORKS: Dict[str, Dict[str, Any]] = {
    "reactnative": {
        "module": "react-native",
        "elements": {"View": "View", "Text": "Text", "Image": "Image"},
        "stylesheet": True,
        "image_attribute": "source",
    },
    "reactsketchapp": {
        "module": "react-sketchapp",
        "elements": {"View": "View", "Text": "Text", "Image": "Image"},
        "stylesheet": True,
        "image_attribute": "source",
    },
    "reactdom": {
        "module": None,
        "elements": {"View": "div", "Text": "span", "Image": "img"},
        "stylesheet": False,
        "image_attribute": "src",
    },
}

# Layer properties that are not part of the style object
ATTRIBUTE_PROPERTIES = {"text", "image", "visible", "numberOfLines", "resizeMode", "font"}


class JavaScriptComponentRenderer:
    """Builds the template context for one React component."""

    def __init__(
        self,
        framework: str,
        colors: ColorSet,
        text_styles: TextStyleSet,
        lookup,
        document: ComponentDocument,
        colors_module: str = "Colors",
        text_styles_module: str = "TextStyles",
    ):
        self.framework = FRAMEWORKS[framework]
        self.colors = colors
        self.text_styles = text_styles
        self.lookup = lookup
        self.document = document
        self.colors_module = colors_module
        self.text_styles_module = text_styles_module

        self.dynamic: Set[Tuple[str, str]] = document.assigned_properties() | document.read_properties()
        self.uses_colors = False
        self.uses_text_styles = False
        self.elements: Set[str] = set()
        self.components: Dict[str, str] = {}
        self.styles: List[Dict[str, Any]] = []

    def build(self) -> Dict[str, Any]:
        declarations = self._declarations()
        statements = self._statements(self.document.logic)
        jsx = "\n".join(self._element(self.document.root, root=True)) or "null"

        return {
            "class_name": pascal_case(self.document.name),
            "primitive_import": self._primitive_import(),
            "local_imports": self._local_imports(),
            "declarations": declarations,
            "statements": statements,
            "jsx": jsx,
            "styles": self.styles,
            "stylesheet": self.framework["stylesheet"],
        }

    # Imports

    def _primitive_import(self) -> str:
        module = self.framework["module"]
        if module is None:
            return ""
        names = sorted(self.elements)
        if self.framework["stylesheet"] and self.styles:
            names.append("StyleSheet")
        if not names:
            return ""
        return f'import {{ {", ".join(sorted(names))} }} from "{module}"'

    def _local_imports(self) -> List[str]:
        lines = []
        if self.uses_colors:
            lines.append(f'import colors from "{relative_import(self.document.relative_path, self.colors_module)}"')
        if self.uses_text_styles:
            lines.append(
                f'import textStyles from "{relative_import(self.document.relative_path, self.text_styles_module)}"'
            )
        for name in sorted(self.components):
            lines.append(f'import {pascal_case(name)} from "{self.components[name]}"')
        return lines

    # Logic

    @staticmethod
    def variable(layer_id: str, prop: str) -> str:
        return camel_case(layer_id) + prop[0].upper() + prop[1:]

    def _declarations(self) -> List[str]:
        lines = []
        for layer in self.document.layers():
            for prop in sorted(p for (layer_id, p) in self.dynamic if layer_id == layer.id):
                if prop in layer.parameters:
                    initial = self._value(layer, prop, layer.parameters[prop])
                else:
                    initial = "undefined"
                lines.append(f"let {self.variable(layer.id, prop)} = {initial}")
        return lines

    def _statements(self, expressions, depth: int = 0) -> List[str]:
        indent = "  " * depth
        lines = []
        for expr in expressions:
            if isinstance(expr, AssignExpr):
                _, layer_id, prop = expr.assignee.path
                layer = self.document.find_layer(layer_id)
                content = self._expression(expr.content, layer, prop)
                lines.append(f"{indent}{self.variable(layer_id, prop)} = {content}")
            elif isinstance(expr, IfExpr):
                lines.append(f"{indent}if ({self._expression(expr.condition)}) {{")
                lines.extend(self._statements(expr.body, depth + 1))
                lines.append(f"{indent}}}")
        return lines

    def _expression(self, expr: Expression, layer: Layer = None, prop: str = None) -> str:
        if isinstance(expr, IdentifierExpr):
            if expr.is_parameter:
                return f"this.props.{expr.path[1]}"
            return self.variable(expr.path[1], expr.path[2])
        if isinstance(expr, LitExpr):
            if layer is not None:
                return self._value(layer, prop, expr.value)
            return json.dumps(expr.value)
        raise RenderError(f"{type(expr).__name__} cannot be used as a value")

    def _value(self, layer: Layer, prop: str, value: Any) -> str:
        kind = value_kind(layer, prop, self.lookup)
        if kind == "color":
            token, _ = resolve_color(value, self.colors)
            if token is not None:
                self.uses_colors = True
                return f"colors.{camel_case(token)}"
            return json.dumps(value)
        if kind == "font":
            style = resolve_text_style(value, self.text_styles)
            self.uses_text_styles = True
            return f"textStyles.{camel_case(style.id)}"
        if kind == "image":
            return f"require({json.dumps(asset_path(value))})"
        return json.dumps(value)

    # Elements

    def _element(self, layer: Layer, root: bool = False) -> List[str]:
        if layer.parameters.get("visible") is False and (layer.id, "visible") not in self.dynamic:
            return []
        if layer.is_builtin:
            lines = self._builtin_element(layer)
        else:
            lines = self._component_element(layer)

        if (layer.id, "visible") in self.dynamic:
            variable = self.variable(layer.id, "visible")
            if root:
                return [f"{variable} && ("] + ["  " + line for line in lines] + [")"]
            lines = [f"{{{variable} && ("] + ["  " + line for line in lines] + [")}"]
        return lines

    def _builtin_element(self, layer: Layer) -> List[str]:
        tag = self.framework["elements"][layer.type]
        self.elements.add(tag)
        attributes = []

        style = self._style_attribute(layer)
        if style:
            attributes.append(f"style={style}")

        if layer.type == "Image":
            source = self._attribute_value(layer, "image")
            if source is not None:
                attributes.append(f'{self.framework["image_attribute"]}={{{source}}}')
            resize_mode = self._attribute_value(layer, "resizeMode")
            if resize_mode is not None and self.framework["stylesheet"]:
                attributes.append(f"resizeMode={{{resize_mode}}}")
        if layer.type == "Text":
            lines = self._attribute_value(layer, "numberOfLines")
            if lines is not None and self.framework["stylesheet"]:
                attributes.append(f"numberOfLines={{{lines}}}")

        opening = " ".join([tag] + attributes)

        if layer.type == "Text":
            if layer.children:
                raise RenderError(f"Text layer '{layer.id}' cannot have children")
            text = self._attribute_value(layer, "text")
            if text is None:
                return [f"<{opening} />"]
            return [f"<{opening}>{{{text}}}</{tag}>"]

        if layer.type == "Image" and layer.children:
            raise RenderError(f"Image layer '{layer.id}' cannot have children")

        children = []
        for child in layer.children:
            children.extend(self._element(child))
        if not children:
            return [f"<{opening} />"]
        return [f"<{opening}>"] + ["  " + line for line in children] + [f"</{tag}>"]

    def _attribute_value(self, layer: Layer, prop: str):
        if (layer.id, prop) in self.dynamic:
            return self.variable(layer.id, prop)
        if prop in layer.parameters:
            return self._value(layer, prop, layer.parameters[prop])
        return None

    def _style_attribute(self, layer: Layer) -> str:
        static_entries = []
        for prop, value in layer.parameters.items():
            if prop == "font":
                static_entries.insert(0, f"...{self._value(layer, prop, value)}")
            elif prop not in ATTRIBUTE_PROPERTIES:
                static_entries.append(f"{prop}: {self._value(layer, prop, value)}")

        dynamic_entries = []
        for layer_id, prop in sorted(self.dynamic):
            if layer_id != layer.id:
                continue
            if prop == "font":
                dynamic_entries.append(f"...{self.variable(layer_id, prop)}")
            elif prop not in ATTRIBUTE_PROPERTIES:
                dynamic_entries.append(f"{prop}: {self.variable(layer_id, prop)}")

        style_name = None
        if static_entries:
            style_name = f"styles.{camel_case(layer.id)}"
            self.styles.append({"name": camel_case(layer.id), "entries": static_entries})

        overrides = ", ".join(dynamic_entries)
        if style_name and overrides:
            if self.framework["stylesheet"]:
                return f"{{[{style_name}, {{ {overrides} }}]}}"
            return f"{{{{ ...{style_name}, {overrides} }}}}"
        if style_name:
            return f"{{{style_name}}}"
        if overrides:
            return f"{{{{ {overrides} }}}}"
        return ""

    def _component_element(self, layer: Layer) -> List[str]:
        if layer.children:
            raise RenderError(f"Component layer '{layer.id}' cannot have children")
        sibling = self.lookup(layer.type)
        check_component_arguments(layer, sibling)
        self.components[layer.type] = relative_import(self.document.relative_path, sibling.relative_path)

        attributes = []
        for prop in layer.parameters:
            attributes.append(f"{prop}={{{self._attribute_value(layer, prop)}}}")
        for layer_id, prop in sorted(self.dynamic):
            if layer_id != layer.id or prop in layer.parameters or prop == "visible":
                continue
            if sibling.parameter(prop) is None:
                raise UnknownParameterError(f"{layer.id}.{prop}", sibling.name)
            attributes.append(f"{prop}={{{self.variable(layer_id, prop)}}}")
        return [f"<{' '.join([pascal_case(layer.type)] + attributes)} />"]
