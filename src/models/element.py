"""
Element and style key models

An Element is one resolved, contiguous styled run produced by the element
parser. Its open/close tag names are composite style keys: "tag", or
"tag:em" / "tag:st" for markdown nested in a tag, or "em" / "st" for
markdown outside any tag.

StyleKey is the two-field form of that composite string. The string form
only exists on Element and at the theme lookup boundary.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .tokens import MarkdownKind


KEY_SEPARATOR = ":"

# Characters with markup meaning outside a tag
MARKUP_CHARACTERS = frozenset("\\<>*_")

_MARKDOWN_SUFFIXES: Dict[str, MarkdownKind] = {kind.value: kind for kind in MarkdownKind}


@dataclass(frozen=True)
class StyleKey:
    """
    Structured (tag, markdown) pair behind a composite style key

    Attributes:
        tag: Base style name (e.g. "title"). Empty for markdown that occurs
             outside any tag scope.
        markdown: Markdown kind nested in the tag, if any

    Example:
        >>> StyleKey("title", MarkdownKind.STRONG).composite
        'title:st'
        >>> StyleKey("", MarkdownKind.EMPHASIS).composite
        'em'
        >>> StyleKey.composite_parse("title:em")
        StyleKey(tag='title', markdown=<MarkdownKind.EMPHASIS: 'em'>)
    """
    tag: str
    markdown: Optional[MarkdownKind] = None

    @property
    def composite(self) -> str:
        """String form used in Element open/close tags and theme lookups"""
        if self.markdown is None:
            return self.tag
        if not self.tag:
            return self.markdown.value
        return f"{self.tag}{KEY_SEPARATOR}{self.markdown.value}"

    @classmethod
    def composite_parse(cls, key: str) -> "StyleKey":
        """
        Split a composite key into base style name and markdown override

        The part before the first ':' selects the base style. A known suffix
        ("em", "st") becomes the markdown override; an unknown suffix is
        ignored. A bare "em" or "st" names a base style of that name, since
        that is how the theme resolves standalone markdown.

        Args:
            key: Composite key (e.g. "title", "title:st", "em")

        Returns:
            StyleKey for theme lookup
        """
        head, separator, suffix = key.partition(KEY_SEPARATOR)
        markdown = _MARKDOWN_SUFFIXES.get(suffix) if separator else None
        return cls(tag=head, markdown=markdown)


@dataclass(frozen=True)
class Element:
    """
    One resolved styled run

    Emitted elements always carry open_tag == close_tag and non-empty
    content. Elements are immutable once emitted.

    Attributes:
        open_tag: Composite key of the opening scope
        content: Literal text of the run (escapes already resolved)
        close_tag: Composite key of the closing scope

    Example:
        For source "<title>*Hi*</title>":
        Element(open_tag="title:em", content="Hi", close_tag="title:em")
    """
    open_tag: str = ""
    content: str = ""
    close_tag: str = ""

    @property
    def key(self) -> StyleKey:
        """Structured style key of this run"""
        return StyleKey.composite_parse(self.open_tag)

    def tags_consistent(self) -> bool:
        """True when the open and close tag names agree"""
        return self.open_tag == self.close_tag

    def dict_export(self) -> Dict[str, Any]:
        """Export using the external field names (openTag/content/closeTag)"""
        return {
            "openTag": self.open_tag,
            "content": self.content,
            "closeTag": self.close_tag,
        }

    def source_make(self) -> str:
        """
        Re-emit this run as tag markup

        Markup characters in the content are backslash-escaped so the
        content survives a second parse unchanged.

        Example:
            >>> Element("title:em", "a*b", "title:em").source_make()
            '<title:em>a\\\\*b</title:em>'
        """
        content = "".join(f"\\{ch}" if ch in MARKUP_CHARACTERS else ch for ch in self.content)
        return f"<{self.open_tag}>{content}</{self.close_tag}>"
