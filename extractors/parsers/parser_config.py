# extractors/parsers/parser_config.py
"""
Configuration module for HTML parser settings.
Contains the table selectors and row markers used across parsers.
"""

from typing import Tuple


class ParserConfig:
    """
    Configuration class containing all parser-related constants and settings.
    """

    # HTML parsing constants
    TABLE_ROW_SELECTOR = "tr"
    TABLE_HEADER_SELECTOR = "th"
    TABLE_BODY_SELECTOR = "tbody"
    HEADER_ROW_CLASS = "thead"

    # Fixture (league schedule) table
    FIXTURE_ROWS_SELECTOR = "table.stats_table tbody tr"

    # Roster table: first table whose header mentions one of these
    ROSTER_HEADER_MARKERS: Tuple[str, ...] = ("squad", "team", "club")

    # Team match logs
    MATCHLOG_TABLE_SELECTOR = "table[id^='matchlogs_for']"
    MATCH_REPORT_LINK_SELECTOR = "td[data-stat='match_report'] a"
    MATCH_REPORT_LINK_TEXT = "Match Report"

    # Default parser used by BeautifulSoup
    SOUP_FEATURES = "html.parser"
