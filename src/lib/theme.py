"""
Theme lookup for parsed runs.

A theme maps base style names ("title", "body", "em") to attribute
dictionaries. The attributes are opaque here: decoding colors, alignments
or fonts is left to the renderer that consumes the resolved runs, and
themes are built from mappings the caller already holds.

Element tags are composite keys. Lookup splits a key on ':'; the head
selects the base style and the optional suffix ("em" / "st") overrides the
style's markdown field:

    >>> theme = Theme({"title": {"size": 24}})
    >>> theme.style_get("title:st")
    Style(name='title', attributes={'size': 24}, markdown=<MarkdownKind.STRONG: 'st'>)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models.element import Element, StyleKey
from ..models.tokens import MarkdownKind
from .log import LOG


class ThemeError(Exception):
    """Raised when a run cannot be resolved against a theme"""
    pass


class MissingStyle(ThemeError):
    """The theme has no entry for a run's base style name"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Theme has no style named '{name}'")


class MissingTheme(ThemeError):
    """Runs were resolved without a theme"""

    def __init__(self) -> None:
        super().__init__("No theme set")


class UnconsistentOpenCloseTag(ThemeError):
    """A run's open and close tag names differ"""

    def __init__(self, open_tag: str, close_tag: str):
        self.open_tag = open_tag
        self.close_tag = close_tag
        super().__init__(f"Open tag '{open_tag}' does not match close tag '{close_tag}'")


@dataclass(frozen=True)
class Style:
    """
    Resolved style for one run

    Attributes:
        name: Base style name the attributes came from
        attributes: Opaque attribute mapping from the theme
        markdown: Markdown override from the key suffix, None for plain runs
    """
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    markdown: Optional[MarkdownKind] = None


@dataclass(frozen=True)
class StyledRun:
    """Content of one element paired with its resolved style"""
    content: str
    style: Style


class Theme:
    """
    In-memory style table keyed by base style name.
    """

    def __init__(self, styles: Mapping[str, Mapping[str, Any]]):
        """
        Args:
            styles: Base style name -> attribute mapping
        """
        self.styles: Dict[str, Dict[str, Any]] = {
            name: dict(attributes) for name, attributes in styles.items()
        }

    def style_has(self, name: str) -> bool:
        return name in self.styles

    def style_get(self, key: str) -> Style:
        """
        Resolve a composite key to a Style.

        Args:
            key: Composite key such as "title", "title:em" or "st"

        Returns:
            Style for the base name with the markdown override applied

        Raises:
            MissingStyle: If the base name has no entry
        """
        style_key = StyleKey.composite_parse(key)
        if style_key.tag not in self.styles:
            raise MissingStyle(style_key.tag)
        return Style(
            name=style_key.tag,
            attributes=dict(self.styles[style_key.tag]),
            markdown=style_key.markdown,
        )

    def __repr__(self) -> str:
        return f"Theme(styles={sorted(self.styles)})"


def element_validate(element: Element) -> None:
    """
    Check that an element's open and close tags agree.

    Raises:
        UnconsistentOpenCloseTag: If they differ
    """
    if not element.tags_consistent():
        raise UnconsistentOpenCloseTag(element.open_tag, element.close_tag)


def runs_resolve(elements: Iterable[Element], theme: Optional[Theme]) -> List[StyledRun]:
    """
    Pair each element with its style from the theme.

    Args:
        elements: Parsed elements, in document order
        theme: Theme to resolve against

    Returns:
        One StyledRun per element, same order

    Raises:
        MissingTheme: If theme is None
        MissingStyle: If an element's base style is not in the theme
        UnconsistentOpenCloseTag: If an element's tags differ
    """
    if theme is None:
        raise MissingTheme()

    runs: List[StyledRun] = []
    for element in elements:
        style = theme.style_get(element.open_tag)
        element_validate(element)
        runs.append(StyledRun(content=element.content, style=style))

    LOG(f"Resolved {len(runs)} runs against {theme!r}", level=2)
    return runs
