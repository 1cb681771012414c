"""Paragraph-split parsing of code-analysis responses.

The analysis prompt asks for markdown sections but nothing enforces the
shape of the reply. We take blank-line separated paragraphs by position:

    paragraph 2 -> suggestions
    paragraph 3 -> vulnerabilities
    paragraph 4 -> improvements

and record how much of that layout was actually present.
"""

from repo_lens.models import ParsedAnalysis, ParseStatus

PARAGRAPH_SEPARATOR = "\n\n"
EXPECTED_PARAGRAPHS = 4


def split_paragraphs(text: str) -> list[str]:
    if not text:
        return []
    return text.split(PARAGRAPH_SEPARATOR)


def _lines(paragraphs: list[str], index: int) -> list[str]:
    if index >= len(paragraphs):
        return []
    return paragraphs[index].split("\n")


def parse_analysis(text: str) -> ParsedAnalysis:
    """Split *text* into suggestion / vulnerability / improvement lines."""
    paragraphs = split_paragraphs(text)

    if len(paragraphs) >= EXPECTED_PARAGRAPHS:
        status = ParseStatus.complete
    elif len(paragraphs) >= 2:
        status = ParseStatus.partial
    else:
        status = ParseStatus.unparseable

    return ParsedAnalysis(
        suggestions=_lines(paragraphs, 1),
        vulnerabilities=_lines(paragraphs, 2),
        improvements=_lines(paragraphs, 3),
        status=status,
    )
