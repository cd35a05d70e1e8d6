# extractors/extraction_config.py
"""
Configuration module for data extraction: selectors, stat markers and
text patterns of the statistics source.
"""

from typing import Dict, Tuple


class ExtractionConfig:
    """
    Configuration class for data extraction settings.
    """

    BASE_URL = "https://fbref.com"
    SQUADS_SEGMENT = "squads"

    # Regex Patterns
    ISO_DATE_PATTERN = r"(\d{4}-\d{2}-\d{2})"
    SLUG_DATE_PATTERN = (
        r"(January|February|March|April|May|June|July|August|September|"
        r"October|November|December)-(\d{1,2})-(\d{4})"
    )
    HTML_COMMENT_PATTERN = r"<!--|-->"

    # Score separator glyph used by the source (en dash)
    SCORE_SEPARATOR = "–"

    # Values treated as empty cells
    EMPTY_VALUES: Tuple[str, ...] = ("", "-", "\u2014")


class MatchReportConfig:
    """
    Selectors and stat markers of a single match report page.
    """

    SCOREBOX = "div.scorebox"
    SCOREBOX_META_ROWS = "div.scorebox_meta > div"
    TEAM_NAME_LINKS = "div.scorebox div[itemprop='performer'] a"
    TEAM_PROFILE_LINKS = (
        "div.scorebox div[itemprop='performer'] a, div.scorebox strong a"
    )
    TEAM_SCORES = "div.scorebox div.score"
    MATCHES_DATE_LINKS = "div.scorebox_meta a[href*='/matches/']"
    VENUE_TIME = "span.venuetime"
    VENUE_DATE_ATTR = "data-venue-date"

    # Meta row labels
    VENUE_LABEL = "Venue"
    ATTENDANCE_LABEL = "Attendance"
    REFEREE_LABELS: Tuple[str, ...] = ("Referee", "Official")
    # ***> Stripped in order; "(Referee)" must go before the bare label <***
    REFEREE_STRIP: Tuple[str, ...] = ("(Referee)", "Officials", "Official", "Referee")

    PLAYER_CELL = "th[data-stat='player'] a"

    # Category name -> substrings that must not appear in the table id
    CATEGORIES: Dict[str, Tuple[str, ...]] = {
        "summary": (),
        "passing": ("passing_types",),
        "passing_types": (),
        "defense": (),
        "misc": (),
        "gca": (),
    }
