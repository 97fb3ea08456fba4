# core/components/document.py
"""Typed intermediate representation of .component files."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple, Union

from core.errors import ComponentDecodeError, UnknownExprTypeError, UnknownParameterError

logger = logging.getLogger(__name__)

BUILTIN_LAYER_TYPES = ("View", "Text", "Image")
PARAMETER_TYPES = ("String", "Boolean", "Number", "Color", "URL")

_LAYOUT_PROPERTIES = {
    "visible", "opacity",
    "width", "height",
    "flexDirection", "alignItems", "justifyContent", "flex",
    "padding", "paddingTop", "paddingRight", "paddingBottom", "paddingLeft",
    "margin", "marginTop", "marginRight", "marginBottom", "marginLeft",
    "backgroundColor", "borderColor", "borderRadius", "borderWidth",
}

LAYER_PROPERTIES: Dict[str, Set[str]] = {
    "View": _LAYOUT_PROPERTIES,
    "Text": _LAYOUT_PROPERTIES | {"text", "font", "color", "numberOfLines"},
    "Image": _LAYOUT_PROPERTIES | {"image", "resizeMode"},
}

COLOR_PROPERTIES = {"backgroundColor", "borderColor", "color"}


@dataclass(frozen=True)
class ComponentParameter:
    name: str
    type: str
    default: Any = None


@dataclass
class Layer:
    id: str
    type: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    children: List["Layer"] = field(default_factory=list)

    @property
    def is_builtin(self) -> bool:
        return self.type in BUILTIN_LAYER_TYPES

    def walk(self) -> Iterator["Layer"]:
        """Yield this layer and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class LitExpr:
    value: Any


@dataclass(frozen=True)
class IdentifierExpr:
    path: Tuple[str, ...]

    @property
    def is_parameter(self) -> bool:
        return self.path[0] == "parameters"


@dataclass(frozen=True)
class AssignExpr:
    assignee: IdentifierExpr
    content: "Expression"


@dataclass(frozen=True)
class IfExpr:
    condition: "Expression"
    body: Tuple["Expression", ...]


Expression = Union[AssignExpr, IfExpr, LitExpr, IdentifierExpr]


@dataclass
class ComponentDocument:
    name: str
    relative_path: str
    parameters: List[ComponentParameter]
    root: Layer
    logic: List[Expression] = field(default_factory=list)

    def parameter(self, name: str) -> Optional[ComponentParameter]:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def layers(self) -> List[Layer]:
        return list(self.root.walk())

    def find_layer(self, layer_id: str) -> Optional[Layer]:
        for layer in self.root.walk():
            if layer.id == layer_id:
                return layer
        return None

    @property
    def component_references(self) -> List[str]:
        """Names of sibling components embedded in this one, in first-use order."""
        names: List[str] = []
        for layer in self.root.walk():
            if not layer.is_builtin and layer.type not in names:
                names.append(layer.type)
        return names

    def assigned_properties(self) -> Set[Tuple[str, str]]:
        """(layer id, property) pairs written by the component logic."""
        assigned: Set[Tuple[str, str]] = set()

        def visit(expressions):
            for expr in expressions:
                if isinstance(expr, AssignExpr):
                    _, layer_id, prop = expr.assignee.path
                    assigned.add((layer_id, prop))
                elif isinstance(expr, IfExpr):
                    visit(expr.body)

        visit(self.logic)
        return assigned

    def read_properties(self) -> Set[Tuple[str, str]]:
        """(layer id, property) pairs read by the component logic."""
        read: Set[Tuple[str, str]] = set()

        def visit(expr):
            if isinstance(expr, IdentifierExpr) and not expr.is_parameter:
                read.add((expr.path[1], expr.path[2]))
            elif isinstance(expr, AssignExpr):
                visit(expr.content)
            elif isinstance(expr, IfExpr):
                visit(expr.condition)
                for statement in expr.body:
                    visit(statement)

        for statement in self.logic:
            visit(statement)
        return read


class ComponentDecoder:
    """Decode the JSON contents of one component file."""

    def __init__(self, name: str, relative_path: str = ""):
        self.name = name
        self.relative_path = relative_path or f"{name}.component"
        self._parameters: Dict[str, ComponentParameter] = {}
        self._layers: Dict[str, Layer] = {}

    def decode(self, raw_text: str) -> ComponentDocument:
        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise ComponentDecodeError(f"Invalid JSON in component '{self.name}': {e}")

        if not isinstance(data, dict):
            raise ComponentDecodeError(f"Component '{self.name}' must be a JSON object")
        if "root" not in data:
            raise ComponentDecodeError(f"Component '{self.name}' has no root layer")

        parameters = [self._decode_parameter(p) for p in self._get_list(data, "params")]
        root = self._decode_layer(data["root"], "root")
        logic = [self._decode_statement(e, f"logic[{i}]")
                 for i, e in enumerate(self._get_list(data, "logic"))]

        logger.debug(f"Decoded component '{self.name}': {len(self._layers)} layers, {len(logic)} logic nodes")
        return ComponentDocument(
            name=self.name,
            relative_path=self.relative_path,
            parameters=parameters,
            root=root,
            logic=logic,
        )

    def _get_list(self, data: Dict[str, Any], key: str) -> List[Any]:
        value = data.get(key, [])
        if not isinstance(value, list):
            raise ComponentDecodeError(f"Field '{key}' of component '{self.name}' must be a list")
        return value

    def _decode_parameter(self, data: Any) -> ComponentParameter:
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise ComponentDecodeError(f"Invalid parameter in component '{self.name}': {data!r}")
        name = data["name"]
        param_type = data.get("type", "String")
        if param_type not in PARAMETER_TYPES:
            raise ComponentDecodeError(
                f"Parameter '{name}' of component '{self.name}' has unsupported type '{param_type}'"
            )
        if name in self._parameters:
            raise ComponentDecodeError(f"Duplicate parameter '{name}' in component '{self.name}'")
        parameter = ComponentParameter(name=name, type=param_type, default=data.get("defaultValue"))
        self._parameters[name] = parameter
        return parameter

    def _decode_layer(self, data: Any, path: str) -> Layer:
        if not isinstance(data, dict):
            raise ComponentDecodeError(f"{path}: layer must be an object")

        layer_id = data.get("id")
        layer_type = data.get("type")
        if not isinstance(layer_id, str) or not layer_id:
            raise ComponentDecodeError(f"{path}: layer is missing an 'id'")
        if not isinstance(layer_type, str) or not layer_type:
            raise ComponentDecodeError(f"{path}: layer '{layer_id}' is missing a 'type'")
        if layer_type.startswith("Lona:"):
            layer_type = layer_type[len("Lona:"):]
        if layer_id in self._layers:
            raise ComponentDecodeError(f"{path}: duplicate layer id '{layer_id}'")

        parameters = data.get("parameters", {})
        if not isinstance(parameters, dict):
            raise ComponentDecodeError(f"{path}: parameters of layer '{layer_id}' must be an object")
        if layer_type in LAYER_PROPERTIES:
            for key in parameters:
                if key not in LAYER_PROPERTIES[layer_type]:
                    raise UnknownParameterError(f"{layer_id}.{key}", self.name)

        layer = Layer(id=layer_id, type=layer_type, parameters=dict(parameters))
        self._layers[layer_id] = layer

        children = data.get("children", [])
        if not isinstance(children, list):
            raise ComponentDecodeError(f"{path}: children of layer '{layer_id}' must be a list")
        layer.children = [
            self._decode_layer(child, f"{path}.{layer_id}[{i}]")
            for i, child in enumerate(children)
        ]
        return layer

    def _decode_statement(self, data: Any, path: str) -> Expression:
        expr = self._decode_expression(data, path)
        if not isinstance(expr, (AssignExpr, IfExpr)):
            raise ComponentDecodeError(f"{path}: only AssignExpr and IfExpr can appear as statements")
        return expr

    def _decode_expression(self, data: Any, path: str) -> Expression:
        # A bare list is shorthand for an identifier path
        if isinstance(data, list):
            return self._decode_identifier(data, path)
        if not isinstance(data, dict) or "type" not in data:
            raise ComponentDecodeError(f"{path}: expression must be an object with a 'type'")

        expr_type = data["type"]
        if expr_type == "AssignExpr":
            assignee = self._decode_identifier(data.get("assignee"), f"{path}.assignee")
            if assignee.is_parameter:
                raise ComponentDecodeError(f"{path}: cannot assign to parameter '{assignee.path[1]}'")
            content = self._decode_expression(data.get("content"), f"{path}.content")
            return AssignExpr(assignee=assignee, content=content)
        if expr_type == "IfExpr":
            condition = self._decode_expression(data.get("condition"), f"{path}.condition")
            body = data.get("body", [])
            if not isinstance(body, list):
                raise ComponentDecodeError(f"{path}.body must be a list")
            return IfExpr(
                condition=condition,
                body=tuple(self._decode_statement(e, f"{path}.body[{i}]") for i, e in enumerate(body)),
            )
        if expr_type == "LitExpr":
            return LitExpr(value=data.get("value"))
        if expr_type == "IdentifierExpr":
            return self._decode_identifier(data.get("path"), path)
        raise UnknownExprTypeError(str(expr_type))

    def _decode_identifier(self, data: Any, path: str) -> IdentifierExpr:
        if not isinstance(data, list) or not data or not all(isinstance(p, str) for p in data):
            raise ComponentDecodeError(f"{path}: identifier must be a non-empty list of strings")

        scope = data[0]
        if scope == "parameters":
            if len(data) != 2:
                raise ComponentDecodeError(f"{path}: parameter path must be ['parameters', name]")
            if data[1] not in self._parameters:
                raise UnknownParameterError(data[1], self.name)
        elif scope == "layers":
            if len(data) != 3:
                raise ComponentDecodeError(f"{path}: layer path must be ['layers', id, property]")
            layer = self._layers.get(data[1])
            if layer is None:
                raise ComponentDecodeError(f"{path}: unknown layer '{data[1]}'")
            if layer.type in LAYER_PROPERTIES and data[2] not in LAYER_PROPERTIES[layer.type]:
                raise UnknownParameterError(f"{layer.id}.{data[2]}", self.name)
        else:
            raise ComponentDecodeError(f"{path}: unknown identifier scope '{scope}'")
        return IdentifierExpr(path=tuple(data))


def decode_component(raw_text: str, name: str, relative_path: str = "") -> ComponentDocument:
    """Convenience function to decode a component from its file contents"""
    return ComponentDecoder(name, relative_path).decode(raw_text)
