from .base import ResultSource
from .fallback import FallbackSessionSource, FallbackTableParser
from .structural import StructuralPageSource, StructuralParser

__all__ = [
    "ResultSource",
    "FallbackSessionSource",
    "FallbackTableParser",
    "StructuralPageSource",
    "StructuralParser",
]
