"""
Text Utilities

Helper functions for text normalization, truncation and HTML cleanup.
"""

import re
from typing import List

from bs4 import BeautifulSoup

# Markup that can carry (possibly unlicensed) supplier media
MEDIA_TAGS = ["img", "figure", "figcaption", "picture", "source", "video", "svg", "iframe"]

# Never useful as text
_NON_TEXT_TAGS = ["script", "style", "noscript"]

# Marks blocks of a synthesized description; "source" blocks carry reused
# supplier text, every other value is generated copy
ENRICHED_ATTR = "data-enriched"
SOURCE_BLOCK = "source"

# Vendor-appended marketing suffix: "Title | Free Shipping | ..."
_TITLE_SUFFIX_RE = re.compile(r'\s+\|\s+.*$', re.DOTALL)

_TRAILING_SEPARATORS = " |-–—,;:"


def collapse_whitespace(text: str) -> str:
    """Trim and collapse runs of whitespace to single spaces."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', str(text)).strip()


def truncate_on_whitespace(text: str, limit: int) -> str:
    """
    Normalize whitespace and cut text to at most `limit` characters.

    Cuts on the last whitespace boundary inside the limit when there is
    one, otherwise hard-cuts. Dangling separators left at the cut are
    dropped.

    Args:
        text: Text to truncate
        limit: Maximum length in characters

    Returns:
        Truncated text (len <= limit)
    """
    text = collapse_whitespace(text)
    if len(text) <= limit:
        return text

    cut = text[:limit]
    if text[limit] != " ":
        boundary = cut.rfind(" ")
        if boundary > 0:
            cut = cut[:boundary]

    trimmed = cut.rstrip(_TRAILING_SEPARATORS)
    return trimmed or text[:limit].rstrip()


def clean_title(title: str) -> str:
    """Drop a trailing " | anything" suffix and normalize whitespace."""
    if not title:
        return ""
    return collapse_whitespace(_TITLE_SUFFIX_RE.sub("", str(title)))


def strip_media_markup(html: str) -> BeautifulSoup:
    """
    Parse HTML and remove every media element (and non-text elements).

    Args:
        html: Raw HTML fragment

    Returns:
        BeautifulSoup tree with media markup decomposed
    """
    soup = BeautifulSoup(html or "", "lxml")
    for tag in soup.find_all(MEDIA_TAGS + _NON_TEXT_TAGS):
        tag.decompose()
    return soup


def parse_source_html(html: str) -> BeautifulSoup:
    """
    Parse a product description down to its supplier-written content.

    Media markup is removed. When the HTML is a previously synthesized
    description, every generated block is removed too and only the
    reused source paragraphs remain, so enriching the same product again
    starts from the same text.
    """
    soup = strip_media_markup(html)
    for tag in soup.find_all(attrs={ENRICHED_ATTR: True}):
        if tag.get(ENRICHED_ATTR) != SOURCE_BLOCK:
            tag.decompose()
    return soup


def html_to_text(html: str, max_length: int = 1000) -> str:
    """
    Reduce an HTML fragment to plain text for classification.

    Args:
        html: Raw HTML fragment
        max_length: Maximum length of the returned text

    Returns:
        Whitespace-collapsed text, at most max_length characters
    """
    if not html:
        return ""
    soup = parse_source_html(html)
    return collapse_whitespace(soup.get_text(" "))[:max_length]


def html_to_paragraphs(html: str) -> List[str]:
    """
    Split an HTML fragment into plain-text paragraphs, media removed.

    Block elements (p, li, headings, divs without nested blocks) become
    one paragraph each; loose text falls back to a single paragraph.
    """
    if not html:
        return []
    soup = parse_source_html(html)

    paragraphs = []
    for block in soup.find_all(["p", "li", "h1", "h2", "h3", "h4", "h5", "h6", "div"]):
        # Only leaf blocks, so nested text is not repeated
        if block.find(["p", "li", "div", "h1", "h2", "h3", "h4", "h5", "h6"]):
            continue
        text = collapse_whitespace(block.get_text(" "))
        if text:
            paragraphs.append(text)

    if not paragraphs:
        text = collapse_whitespace(soup.get_text(" "))
        if text:
            paragraphs.append(text)

    return paragraphs
