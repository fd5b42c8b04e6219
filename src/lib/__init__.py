"""
stylerun - Inline style markup to styled text runs

Tag scopes with nested emphasis/strong markdown, resolved into a flat list
of runs for theme lookup.
"""

__version__ = "1.0.0"

from .tokenizer import Tokenizer, InvalidTag
from .parser import ElementParser, parse
from .theme import (
    Theme,
    Style,
    StyledRun,
    runs_resolve,
    ThemeError,
    MissingStyle,
    MissingTheme,
    UnconsistentOpenCloseTag,
)
from .log import LOG, state_connectToLogger

__all__ = [
    "Tokenizer",
    "InvalidTag",
    "ElementParser",
    "parse",
    "Theme",
    "Style",
    "StyledRun",
    "runs_resolve",
    "ThemeError",
    "MissingStyle",
    "MissingTheme",
    "UnconsistentOpenCloseTag",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
