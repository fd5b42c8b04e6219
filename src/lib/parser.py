"""
Element parser for stylerun markup

Assembles the tokenizer's stream into a flat, ordered list of Elements,
one per styled run.

The parser keeps two accumulators:
1. current: the enclosing tag scope, or a markdown scope with no tag
2. nested: a markdown scope opened inside the current tag scope

Markdown nested in a tag is keyed "tag:em" / "tag:st"; markdown outside
any tag is keyed "em" / "st". Several markdown runs may occur inside one
tag scope. Elements left with empty content (e.g. a tag whose whole body
is markdown) are dropped before the list is returned.

Example:
    >>> parse("<title>*Hello**world !*</title>")
    [Element(open_tag='title:em', content='Hello', close_tag='title:em'),
     Element(open_tag='title:em', content='world !', close_tag='title:em')]
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..models.element import Element, StyleKey
from ..models.tokens import (
    MarkdownKind,
    MarkdownOpen,
    MarkdownClose,
    TagOpen,
    TagClose,
    Text,
    Token,
)
from .tokenizer import Tokenizer
from .log import LOG


@dataclass
class _Scope:
    """Mutable accumulator for a scope that has not been emitted yet"""
    open_tag: str = ""
    content: str = ""


class ElementParser:
    """
    Consumes a token stream into Elements

    Handles:
    - Tag scopes (<name>...</name>)
    - Markdown nested in a tag scope, any number of runs per tag
    - Markdown outside any tag
    - Text before, between and after nested markdown runs, in order

    The parser does not check that open and close tag names agree; an
    element closed by a mismatched tag keeps both names so consumers can
    reject it.
    """

    def __init__(self) -> None:
        """
        Attributes:
            elements: Elements emitted so far, in document order
            current: Tag scope (or tagless markdown scope) being filled
            nested: Markdown scope inside the current tag scope, if any
        """
        self.elements: List[Element] = []
        self.current = _Scope()
        self.nested: Optional[_Scope] = None

    def parse(self, tokens: Iterable[Token]) -> List[Element]:
        """
        Consume the full token stream

        Args:
            tokens: Token stream, typically a Tokenizer

        Returns:
            Elements with non-empty content, in document order

        Raises:
            InvalidTag: Propagated from the tokenizer on an unterminated tag
        """
        self.elements = []
        self.current = _Scope()
        self.nested = None

        for token in tokens:
            LOG(f"Token: {token}", level=3)
            self.token_apply(token)

        elements = [element for element in self.elements if element.content]
        LOG(f"Parsed {len(elements)} elements ({len(self.elements) - len(elements)} empty dropped)", level=2)
        return elements

    def token_apply(self, token: Token) -> None:
        """Dispatch one token to its handler"""
        if isinstance(token, Text):
            self.text_handle(token.text)
        elif isinstance(token, TagOpen):
            self.tagOpen_handle(token.name)
        elif isinstance(token, TagClose):
            self.tagClose_handle(token.name)
        elif isinstance(token, MarkdownOpen):
            self.markdownOpen_handle(token.kind)
        elif isinstance(token, MarkdownClose):
            self.markdownClose_handle(token.kind)
        else:
            raise TypeError(f"Unknown token: {token!r}")

    def element_emit(self, scope: _Scope, close_tag: str) -> None:
        """Freeze a scope into an Element and append it"""
        self.elements.append(
            Element(open_tag=scope.open_tag, content=scope.content, close_tag=close_tag)
        )

    def text_handle(self, text: str) -> None:
        if self.nested is not None:
            self.nested.content = text
        else:
            self.current.content = text

    def tagOpen_handle(self, name: str) -> None:
        """
        Start a tag scope

        Text already collected under another open tag is emitted first.
        Text collected outside any scope has no style key and is dropped.
        """
        if self.current.open_tag and self.current.content:
            self.element_emit(self.current, self.current.open_tag)
        self.current = _Scope(open_tag=name)

    def tagClose_handle(self, name: str) -> None:
        self.element_emit(self.current, name)
        self.current = _Scope()

    def markdownOpen_handle(self, kind: MarkdownKind) -> None:
        """
        Start a markdown scope

        Inside a tag scope this opens the nested scope "tag:kind"; text the
        tag scope holds so far is emitted first so runs stay in order.
        Outside a tag it starts a fresh top-level scope "kind".
        """
        if self.current.open_tag:
            if self.current.content:
                self.element_emit(self.current, self.current.open_tag)
                self.current.content = ""
            self.nested = _Scope(open_tag=StyleKey(self.current.open_tag, kind).composite)
        else:
            self.current = _Scope(open_tag=StyleKey("", kind).composite)

    def markdownClose_handle(self, kind: MarkdownKind) -> None:
        """
        Finish the innermost markdown scope

        A nested scope closes alone; the enclosing tag scope stays open.
        Otherwise the current scope is emitted, closing with its own open tag.
        """
        if self.nested is not None:
            self.element_emit(self.nested, self.nested.open_tag)
            self.nested = None
            return

        if self.current.open_tag:
            self.element_emit(self.current, self.current.open_tag)
        self.current = _Scope()


def parse(text: str) -> List[Element]:
    """
    Parse markup into styled runs

    Each call uses its own tokenizer and parser, so concurrent calls on
    independent inputs need no locking.

    Args:
        text: Raw markup

    Returns:
        Elements in document order; empty for empty input

    Raises:
        InvalidTag: If a '<' is never closed by '>'

    Example:
        >>> parse("<title>Hello world !</title>")
        [Element(open_tag='title', content='Hello world !', close_tag='title')]
    """
    return ElementParser().parse(Tokenizer(text))
