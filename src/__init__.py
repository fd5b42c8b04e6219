"""
stylerun - Inline style markup to styled text runs

Resolves <tag>...</tag> scopes with nested *emphasis* / **strong** markdown
into a flat, ordered list of Elements for theme lookup and rendering.
"""

__version__ = "1.0.0"

from .lib import (
    parse,
    Tokenizer,
    ElementParser,
    InvalidTag,
    Theme,
    Style,
    StyledRun,
    runs_resolve,
    ThemeError,
    MissingStyle,
    MissingTheme,
    UnconsistentOpenCloseTag,
    LOG,
    state_connectToLogger,
)
from .models import (
    Element,
    StyleKey,
    MarkdownKind,
    Text,
    TagOpen,
    TagClose,
    MarkdownOpen,
    MarkdownClose,
)

__all__ = [
    "parse",
    "Tokenizer",
    "ElementParser",
    "InvalidTag",
    "Theme",
    "Style",
    "StyledRun",
    "runs_resolve",
    "ThemeError",
    "MissingStyle",
    "MissingTheme",
    "UnconsistentOpenCloseTag",
    "Element",
    "StyleKey",
    "MarkdownKind",
    "Text",
    "TagOpen",
    "TagClose",
    "MarkdownOpen",
    "MarkdownClose",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
