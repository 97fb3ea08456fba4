"""Component document decoding."""

from .document import (
    AssignExpr,
    ComponentDocument,
    ComponentParameter,
    IdentifierExpr,
    IfExpr,
    Layer,
    LitExpr,
    decode_component,
)
