"""
Theme lookup tests - composite key splitting and run resolution

Tests Theme.style_get(), StyleKey parsing and runs_resolve() together with
the consumer-side errors.
"""

import pytest

from stylerun.lib.parser import parse
from stylerun.lib.theme import (
    Theme,
    Style,
    StyledRun,
    runs_resolve,
    element_validate,
    ThemeError,
    MissingStyle,
    MissingTheme,
    UnconsistentOpenCloseTag,
)
from stylerun.models.element import Element, StyleKey
from stylerun.models.tokens import MarkdownKind


@pytest.fixture
def theme() -> Theme:
    """Small theme with title, body and standalone emphasis styles"""
    return Theme({
        "title": {"size": 24, "color": "black"},
        "body": {"size": 13},
        "em": {"size": 13, "color": "red"},
    })


class TestStyleKey:
    """Test the structured form of composite keys"""

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("title", StyleKey("title", None)),
            ("title:em", StyleKey("title", MarkdownKind.EMPHASIS)),
            ("title:st", StyleKey("title", MarkdownKind.STRONG)),
            ("title:xx", StyleKey("title", None)),
            ("em", StyleKey("em", None)),
            ("", StyleKey("", None)),
        ],
    )
    def test_composite_parse(self, key, expected):
        """Head is the base style, known suffix is the markdown"""
        assert StyleKey.composite_parse(key) == expected

    def test_composite(self):
        """Two-field key renders back to the string form"""
        assert StyleKey("title", MarkdownKind.EMPHASIS).composite == "title:em"
        assert StyleKey("title").composite == "title"
        assert StyleKey("", MarkdownKind.STRONG).composite == "st"


class TestStyleGet:
    """Test Theme.style_get()"""

    def test_plain_tag(self, theme):
        """Plain key returns the base style with no markdown"""
        assert theme.style_get("title") == Style("title", {"size": 24, "color": "black"}, None)

    def test_suffix_overrides_markdown(self, theme):
        """':st' sets the markdown field on the base style"""
        style = theme.style_get("title:st")
        assert style.name == "title"
        assert style.attributes == {"size": 24, "color": "black"}
        assert style.markdown is MarkdownKind.STRONG

    def test_standalone_key(self, theme):
        """'em' resolves to the style named 'em'"""
        assert theme.style_get("em").name == "em"

    def test_missing_style(self, theme):
        """Unknown base name raises MissingStyle with the name"""
        with pytest.raises(MissingStyle) as excinfo:
            theme.style_get("footer:em")
        assert excinfo.value.name == "footer"

    def test_attributes_not_shared(self, theme):
        """Mutating a resolved style does not touch the theme"""
        theme.style_get("body").attributes["size"] = 99
        assert theme.style_get("body").attributes["size"] == 13

    def test_style_has(self, theme):
        assert theme.style_has("body")
        assert not theme.style_has("body:em")


class TestRunsResolve:
    """Test resolving parsed elements against a theme"""

    def test_resolves_in_order(self, theme):
        """Each element becomes a StyledRun, order preserved"""
        runs = runs_resolve(parse("<title>Hi *there*</title>*!*"), theme)

        assert [run.content for run in runs] == ["Hi ", "there", "!"]
        assert [run.style.name for run in runs] == ["title", "title", "em"]
        assert [run.style.markdown for run in runs] == [None, MarkdownKind.EMPHASIS, None]
        assert all(isinstance(run, StyledRun) for run in runs)

    def test_empty(self, theme):
        """No elements, no runs"""
        assert runs_resolve([], theme) == []

    def test_missing_theme(self):
        """Resolving without a theme raises MissingTheme"""
        with pytest.raises(MissingTheme):
            runs_resolve(parse("<title>x</title>"), None)

    def test_missing_style(self, theme):
        """An element whose tag is not in the theme raises MissingStyle"""
        with pytest.raises(MissingStyle):
            runs_resolve(parse("<footer>x</footer>"), theme)

    def test_inconsistent_tags(self, theme):
        """Mismatched open/close tags raise UnconsistentOpenCloseTag"""
        with pytest.raises(UnconsistentOpenCloseTag) as excinfo:
            runs_resolve(parse("<title>x</body>"), theme)
        assert excinfo.value.open_tag == "title"
        assert excinfo.value.close_tag == "body"

    def test_errors_share_base(self):
        """All consumer errors are ThemeErrors"""
        assert issubclass(MissingStyle, ThemeError)
        assert issubclass(MissingTheme, ThemeError)
        assert issubclass(UnconsistentOpenCloseTag, ThemeError)


class TestElementValidate:
    """Test the standalone consistency check"""

    def test_consistent(self):
        element_validate(Element("a", "x", "a"))

    def test_inconsistent(self):
        with pytest.raises(UnconsistentOpenCloseTag):
            element_validate(Element("a:em", "x", "a"))
