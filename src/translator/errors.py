"""Fatal translation errors.

Translation is fail-fast: the first violated contract aborts the run and
carries the position of the offending token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .tokens import Token


class TranslationError(Exception):
    def __init__(self, message: str, line: int = 0, col: int = 0):
        self.message = message
        self.line = line
        self.col = col
        super().__init__(f"{message} at {line}:{col}")

    @classmethod
    def at(cls, message: str, token: Optional[Token]) -> TranslationError:
        if token is None:
            return cls(message)
        return cls(message, token.line, token.col)


class ResolutionError(TranslationError):
    """An identifier or accessor names no known variable."""


class GrammarViolation(TranslationError):
    """An expected token class is absent at a required position."""
