"""groovy2js translator package."""

from .lexer import Lexer as Lexer, LexerError as LexerError
from .errors import TranslationError as TranslationError
from .errors import ResolutionError as ResolutionError, GrammarViolation as GrammarViolation
from .scope import Scope as Scope, Variable as Variable, VariableType as VariableType
from .tables import TranslationTables as TranslationTables
from .analyser import Analyser as Analyser, translate as translate
