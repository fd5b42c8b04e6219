"""
Custom Pygments lexer for stylerun markup highlighting

Used by the CLI's --highlight option to show markup source with tags,
markdown delimiters and escapes picked out.

Token types:
- Name.Tag: Tag names (e.g. title in <title>)
- Punctuation: Angle brackets and the closing slash
- Generic.Emph: Emphasis delimiters and their content
- Generic.Strong: Strong delimiters and their content
- String.Escape: Backslash escapes
- Error: A '<' that is never closed
"""

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import RegexLexer, bygroups, include
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Generic,
    Error,
)


class StylerunLexer(RegexLexer):
    """
    Lexer for stylerun markup

    Delimiter handling follows the tokenizer: inside emphasis, any single
    delimiter closes the scope (so "*a**b*" is two emphasis runs); inside
    strong, a single or doubled delimiter closes it.

    Example:
        <title>**Hello** world</title>

    Tokens:
        < → Punctuation
        title → Name.Tag
        ** → Generic.Strong
        Hello → Generic.Strong
        world → Text
    """

    name = 'Stylerun'
    aliases = ['stylerun', 'srun']
    filenames = ['*.srun']

    tokens = {
        'escape': [
            (r'\\[\s\S]?', String.Escape),
        ],

        'tag': [
            (r'(<)(/?)([^>]*)(>)', bygroups(Punctuation, Punctuation, Name.Tag, Punctuation)),
            (r'<', Error),
        ],

        'root': [
            include('escape'),
            include('tag'),

            # Doubled delimiters open strong before single ones open emphasis
            (r'\*\*|__', Generic.Strong, 'strong'),
            (r'[*_]', Generic.Emph, 'emphasis'),

            (r'[^\\<*_]+', Text),
        ],

        'strong': [
            include('escape'),
            include('tag'),
            (r'[*_]{1,2}', Generic.Strong, '#pop'),
            (r'[^\\<*_]+', Generic.Strong),
        ],

        'emphasis': [
            include('escape'),
            include('tag'),
            (r'[*_]', Generic.Emph, '#pop'),
            (r'[^\\<*_]+', Generic.Emph),
        ],
    }


def get_lexer() -> StylerunLexer:
    """
    Get the StylerunLexer instance

    Returns:
        StylerunLexer instance ready for use with Pygments
    """
    return StylerunLexer()


def source_highlight(source: str, style: str = "monokai") -> str:
    """
    Render markup source for a 256-colour terminal

    Args:
        source: Raw markup
        style: Pygments style name

    Returns:
        Source with ANSI colour escapes
    """
    return highlight(source, get_lexer(), Terminal256Formatter(style=style))
