"""Analyser assembly: combines the production mixins into the final Analyser class."""

from typing import Optional

from ..scope import Scope
from ..tables import TranslationTables
from .core import AnalyserBase, Fragment, Translation
from .statements import StatementsMixin
from .expressions import ExpressionsMixin
from .accessors import AccessorsMixin
from .operators import OperatorsMixin
from .literals import LiteralsMixin
from .closures import ClosuresMixin


class Analyser(
    ClosuresMixin,
    LiteralsMixin,
    OperatorsMixin,
    AccessorsMixin,
    ExpressionsMixin,
    StatementsMixin,
    AnalyserBase,
):
    """Single-pass Groovy to JavaScript translator."""
    pass


def translate(
    source: str,
    scope: Optional[Scope] = None,
    tables: Optional[TranslationTables] = None,
) -> str:
    """Translate Groovy source text to JavaScript."""
    return Analyser(source, tables=tables, scope=scope).translate().output


__all__ = ["Analyser", "Fragment", "Translation", "translate"]
