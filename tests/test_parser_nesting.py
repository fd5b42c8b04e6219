"""
Nesting parser tests - text around markdown, malformed input, round trips

Tests that runs come out in document order when a tag mixes plain text
and markdown, that malformed input resolves deterministically, and that
element contents survive a re-parse of their re-emitted source.
"""

import threading

import pytest

from stylerun.lib.parser import parse
from stylerun.models.element import Element


class TestTextAroundMarkdown:
    """Test plain text mixed with markdown inside one tag"""

    def test_text_before_markdown(self):
        """Text before a nested run is emitted first"""
        assert parse("<title>Hello *world*</title>") == [
            Element("title", "Hello ", "title"),
            Element("title:em", "world", "title:em"),
        ]

    def test_text_after_markdown(self):
        """Text after a nested run belongs to the tag"""
        assert parse("<title>*Hello* world</title>") == [
            Element("title:em", "Hello", "title:em"),
            Element("title", " world", "title"),
        ]

    def test_text_between_runs(self):
        """Text, markdown, text, markdown, text"""
        assert parse("<body>a *b* c **d** e</body>") == [
            Element("body", "a ", "body"),
            Element("body:em", "b", "body:em"),
            Element("body", " c ", "body"),
            Element("body:st", "d", "body:st"),
            Element("body", " e", "body"),
        ]

    def test_tag_inside_markdown(self):
        """A tag opened inside standalone markdown starts its own run"""
        assert parse("*a<t>b</t>*") == [
            Element("em", "a", "em"),
            Element("t", "b", "t"),
        ]


class TestMalformedInput:
    """Test deterministic handling of malformed-but-terminated input"""

    def test_mismatched_close(self):
        """A mismatched close tag is kept for consumers to reject"""
        elements = parse("<a>x</b>")
        assert elements == [Element("a", "x", "b")]
        assert not elements[0].tags_consistent()

    def test_text_outside_tags_dropped(self):
        """Text outside any scope has no style key"""
        assert parse("loose <a>x</a> text") == [Element("a", "x", "a")]

    def test_nested_tags_flatten(self):
        """Tag-in-tag splits into sibling runs"""
        assert parse("<a>x<b>y</b></a>") == [
            Element("a", "x", "a"),
            Element("b", "y", "b"),
        ]

    def test_markdown_left_open_across_close_tag(self):
        """A nested run still open at the close tag is emitted at end"""
        assert parse("<t>*abc</t>") == [Element("t:em", "abc", "t:em")]

    def test_stray_close_tag(self):
        """A close tag with nothing open yields nothing when empty"""
        assert parse("</a><b>y</b>") == [Element("b", "y", "b")]

    def test_deterministic(self):
        """Same input, same output"""
        text = "<t>_a__b___c____d_</t>*e"
        assert parse(text) == parse(text)


class TestRoundTrip:
    """Test that contents survive a re-parse of the re-emitted source"""

    @pytest.mark.parametrize(
        "text",
        [
            "<title>Hello world !</title><body>This can be a description</body>",
            "<title>*Hello**world !*</title>",
            "<title>Another Title \\<\\></title>",
            "<title>Hello world !</title>*LOL*<body>**This is a body**</body>",
            "<body>a *b* c</body>",
            "<code>snake\\_case \\* 2</code>",
        ],
    )
    def test_contents_round_trip(self, text):
        """Re-emitting <openTag>content</closeTag> reproduces the contents"""
        elements = parse(text)
        reparsed = parse("".join(element.source_make() for element in elements))

        assert [e.content for e in reparsed] == [e.content for e in elements]
        assert [e.open_tag for e in reparsed] == [e.open_tag for e in elements]


class TestConcurrency:
    """Test that independent parses share no state"""

    def test_parallel_parses(self):
        """Threads parsing different inputs get their own results"""
        inputs = [f"<t{i}>*run {i}*</t{i}>" for i in range(16)]
        results = {}

        def worker(index: int) -> None:
            results[index] = parse(inputs[index])

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(len(inputs))]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for i in range(len(inputs)):
            assert results[i] == [Element(f"t{i}:em", f"run {i}", f"t{i}:em")]
