"""HTML to Text — visible text extraction for imported source URLs.

Invariants:
    - Input truncated to max_chars before parsing
    - script, style, noscript and template elements never contribute text
    - Output whitespace collapsed to single spaces, stripped
"""

from bs4 import BeautifulSoup

DEFAULT_MAX_CHARS = 200_000

_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


def html_to_text(html: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Strip markup from an HTML document and return its visible text."""
    if not html:
        return ""
    soup = BeautifulSoup(html[:max_chars], "html.parser")
    for tag in soup(_INVISIBLE_TAGS):
        tag.decompose()
    text = soup.get_text(separator=" ")
    return " ".join(text.split())
