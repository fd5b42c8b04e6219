"""
Models package for stylerun

Contains data structures and type definitions for tokenizing, parsing and
the CLI pipeline.
"""

from .state import ProgramState, pipeline
from .tokens import MarkdownKind, Text, TagOpen, TagClose, MarkdownOpen, MarkdownClose, Token
from .element import Element, StyleKey, KEY_SEPARATOR

__all__ = [
    "ProgramState",
    "pipeline",
    "MarkdownKind",
    "Text",
    "TagOpen",
    "TagClose",
    "MarkdownOpen",
    "MarkdownClose",
    "Token",
    "Element",
    "StyleKey",
    "KEY_SEPARATOR",
]
