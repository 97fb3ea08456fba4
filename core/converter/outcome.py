# core/converter/outcome.py
"""Tagged success/failure results for per-file conversion."""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from core.errors import ErrorKind, LonaError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Outcome[T]":
        return cls(error_kind=kind, message=message)


def capture(operation: Callable[..., T], *args, **kwargs) -> Outcome[T]:
    """Run ``operation`` and turn any error it raises into a failed outcome."""
    try:
        return Outcome.success(operation(*args, **kwargs))
    except LonaError as e:
        return Outcome.failure(e.kind, str(e))
    except Exception as e:
        logger.debug("Uncategorized conversion error", exc_info=True)
        return Outcome.failure(ErrorKind.OTHER, f"{type(e).__name__}: {e}")
