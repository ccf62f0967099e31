"""CLI command modules."""

from .add import add
from .export import export
from .mood import mood

__all__ = [
    "add",
    "mood",
    "export",
]
