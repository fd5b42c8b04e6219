"""
Token models for the stylerun tokenizer

The tokenizer turns raw markup into a flat stream of these tokens. Each
token is one of five variants:

- Text: a literal content run
- TagOpen / TagClose: boundaries of a named style scope (<name>...</name>)
- MarkdownOpen / MarkdownClose: boundaries of an inline emphasis or strong
  scope (*x*, _x_, **x**, __x__)
"""

from enum import Enum
from dataclasses import dataclass
from typing import Union


class MarkdownKind(Enum):
    """
    Kinds of inline markdown scope

    The value is the suffix used in composite style keys ("title:em").
    """
    EMPHASIS = "em"     # *x* or _x_
    STRONG = "st"       # **x** or __x__


@dataclass(frozen=True)
class Text:
    """Literal content run"""
    text: str


@dataclass(frozen=True)
class TagOpen:
    """Opening boundary of a named style scope, e.g. <title>"""
    name: str


@dataclass(frozen=True)
class TagClose:
    """Closing boundary of a named style scope, e.g. </title>"""
    name: str


@dataclass(frozen=True)
class MarkdownOpen:
    """Opening boundary of an inline markdown scope"""
    kind: MarkdownKind


@dataclass(frozen=True)
class MarkdownClose:
    """Closing boundary of an inline markdown scope"""
    kind: MarkdownKind


Token = Union[Text, TagOpen, TagClose, MarkdownOpen, MarkdownClose]
