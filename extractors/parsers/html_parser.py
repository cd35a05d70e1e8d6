# extractors/parsers/html_parser.py
"""
Soup construction shared by every parser.
"""

import re

from bs4 import BeautifulSoup

from extractors.extraction_config import ExtractionConfig

from .parser_config import ParserConfig

_COMMENT_MARKERS = re.compile(ExtractionConfig.HTML_COMMENT_PATTERN)


def make_soup(html: str, uncomment: bool = False) -> BeautifulSoup:
    """
    Parse an HTML document.

    Args:
        html: Raw document text
        uncomment: Drop comment markers first. The source ships several stat
            tables inside HTML comments and reveals them with script.

    Returns:
        BeautifulSoup document
    """
    if uncomment:
        html = _COMMENT_MARKERS.sub("", html)
    return BeautifulSoup(html, ParserConfig.SOUP_FEATURES)
