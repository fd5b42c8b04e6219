r"""
Tokenizer for stylerun markup

Scans raw markup character by character and produces a lazy, finite,
non-restartable stream of tokens (see models.tokens).

Grammar:
    <name>...</name>     named style scope
    *text* or _text_     emphasis
    **text** or __text__ strong
    \c                   character c taken literally

Delimiter ambiguity is resolved with a single character of lookahead and a
one-slot memory of the currently open markdown scope:

- A delimiter followed by the same character is doubled (strong), otherwise
  single (emphasis).
- With no scope open, a delimiter opens one. With a scope open, any
  delimiter closes it, using the kind that was opened. A doubled delimiter
  that closes an emphasis scope gives its second character back to be
  scanned again.

Example:
    >>> list(Tokenizer("<title>*Hi*</title>"))
    [TagOpen(name='title'), MarkdownOpen(kind=<MarkdownKind.EMPHASIS: 'em'>),
     Text(text='Hi'), MarkdownClose(kind=<MarkdownKind.EMPHASIS: 'em'>),
     TagClose(name='title')]
"""

from enum import Enum, auto
from typing import Dict, Iterator, List, Optional

from ..models.tokens import (
    MarkdownKind,
    MarkdownOpen,
    MarkdownClose,
    TagOpen,
    TagClose,
    Text,
    Token,
)


ESCAPE = "\\"
TAG_START = "<"
TAG_END = ">"
TAG_CLOSE_MARKER = "/"
MARKDOWN_DELIMITERS = frozenset("*_")


class InvalidTag(SyntaxError):
    """
    Raised when a tag is left open at end of input

    Either a '<' is never closed by '>', or a <name> scope is never
    closed by a </...> tag.

    Attributes:
        position: Offset of the offending '<' in the source
        source: Full source text being tokenized
        reason: Short description of what was left open
    """

    def __init__(self, position: int, source: str, reason: str = "Unterminated tag"):
        self.position = position
        self.source = source
        self.reason = reason
        super().__init__(self._message_build())

    def _message_build(self) -> str:
        context = self.source[self.position:self.position + 40]
        return f"{self.reason} at offset {self.position}: {context!r}"


class MarkdownState(Enum):
    """Open markdown scope memory, one per tokenizer"""
    CLOSED = auto()
    OPEN_EMPHASIS = auto()
    OPEN_STRONG = auto()


_STATE_FOR_KIND: Dict[MarkdownKind, MarkdownState] = {
    MarkdownKind.EMPHASIS: MarkdownState.OPEN_EMPHASIS,
    MarkdownKind.STRONG: MarkdownState.OPEN_STRONG,
}

_KIND_FOR_STATE: Dict[MarkdownState, MarkdownKind] = {
    state: kind for kind, state in _STATE_FOR_KIND.items()
}


class Cursor:
    """
    Character cursor with one character of pushback

    The most recently read character can be un-read exactly once before
    the next read.

    Attributes:
        text: Source text
        position: Index of the next character to read
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self._unreadable = False

    def char_next(self) -> Optional[str]:
        """Read the next character, or None at end of input"""
        if self.position >= len(self.text):
            self._unreadable = False
            return None
        ch = self.text[self.position]
        self.position += 1
        self._unreadable = True
        return ch

    def char_unread(self) -> None:
        """
        Push the most recently read character back

        Raises:
            RuntimeError: If nothing was read since the last pushback
        """
        if not self._unreadable:
            raise RuntimeError("Cursor can only un-read the last character read, once")
        self.position -= 1
        self._unreadable = False


class Tokenizer:
    """
    Lazy token producer for one source string

    Call token_next() until it returns None, or iterate the instance.
    Each instance owns its cursor, buffer and markdown state; it is
    exhausted after one pass.
    """

    def __init__(self, text: str):
        self.cursor = Cursor(text)
        self.buffer: List[str] = []
        self.markdown_state = MarkdownState.CLOSED
        # Offsets of <name> tags not yet matched by a closing tag
        self.open_tags: List[int] = []

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.token_next()
        if token is None:
            raise StopIteration
        return token

    def token_next(self) -> Optional[Token]:
        """
        Produce the next token

        Returns:
            Next token, or None once the input is exhausted

        Raises:
            InvalidTag: If a tag is still open at end of input
        """
        while True:
            ch = self.cursor.char_next()
            if ch is None:
                return self.stream_finish()

            if ch == ESCAPE:
                # A trailing backslash is dropped
                escaped = self.cursor.char_next()
                if escaped is not None:
                    self.buffer.append(escaped)
            elif ch in MARKDOWN_DELIMITERS:
                if self.buffer:
                    return self.buffer_flush(pushback=True)
                return self.markdown_resolve(ch)
            elif ch == TAG_START:
                if self.buffer:
                    return self.buffer_flush(pushback=True)
                return self.tag_scan()
            else:
                self.buffer.append(ch)

    def buffer_flush(self, pushback: bool = False) -> Text:
        """
        Emit the accumulated text as a Text token

        Args:
            pushback: Give the character just read back to the cursor so
                      the next call processes it
        """
        if pushback:
            self.cursor.char_unread()
        text = "".join(self.buffer)
        self.buffer.clear()
        return Text(text)

    def markdown_resolve(self, delimiter: str) -> Token:
        """
        Resolve a markdown delimiter into an open or close token

        Args:
            delimiter: The '*' or '_' just read

        Returns:
            MarkdownOpen when no scope is open, else MarkdownClose for the
            kind that was opened
        """
        peeked = self.cursor.char_next()
        doubled = peeked == delimiter
        if peeked is not None and not doubled:
            self.cursor.char_unread()
        kind = MarkdownKind.STRONG if doubled else MarkdownKind.EMPHASIS

        if self.markdown_state is MarkdownState.CLOSED:
            self.markdown_state = _STATE_FOR_KIND[kind]
            return MarkdownOpen(kind)

        previous = _KIND_FOR_STATE[self.markdown_state]
        self.markdown_state = MarkdownState.CLOSED
        if doubled and previous is MarkdownKind.EMPHASIS:
            # "*a**b*": the second '*' opens the next scope
            self.cursor.char_unread()
        return MarkdownClose(previous)

    def tag_scan(self) -> Token:
        """
        Read a tag name up to the next '>'

        Returns:
            TagClose for "</name>", TagOpen for "<name>"

        Raises:
            InvalidTag: If the input ends before '>'
        """
        start = self.cursor.position - 1
        name: List[str] = []
        while True:
            ch = self.cursor.char_next()
            if ch is None:
                raise InvalidTag(start, self.cursor.text)
            if ch == TAG_END:
                break
            name.append(ch)

        tag_name = "".join(name)
        if tag_name.startswith(TAG_CLOSE_MARKER):
            if self.open_tags:
                self.open_tags.pop()
            return TagClose(tag_name[len(TAG_CLOSE_MARKER):])
        self.open_tags.append(start)
        return TagOpen(tag_name)

    def stream_finish(self) -> Optional[Token]:
        """
        Drain end-of-input state

        Emits any buffered text first, then a synthetic close for a
        markdown scope left open. Unterminated markdown degrades to a
        closed scope; an unclosed tag scope does not.

        Raises:
            InvalidTag: If a <name> scope was never closed
        """
        if self.buffer:
            return self.buffer_flush()
        if self.markdown_state is not MarkdownState.CLOSED:
            kind = _KIND_FOR_STATE[self.markdown_state]
            self.markdown_state = MarkdownState.CLOSED
            return MarkdownClose(kind)
        if self.open_tags:
            raise InvalidTag(self.open_tags[0], self.cursor.text, reason="Tag never closed")
        return None


def tokens_list(text: str) -> List[Token]:
    """Tokenize a whole string eagerly"""
    return list(Tokenizer(text))
