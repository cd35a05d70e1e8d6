# extractors/base_extractor.py
"""
Base data extraction utilities with common extraction methods.
Provides lenient cell reading shared by all table parsers.
"""

from typing import Optional
from urllib.parse import urljoin

from bs4 import Tag

from .extraction_config import ExtractionConfig


class BaseDataExtractor:
    """
    Base class providing common data extraction methods.

    Numeric reads never fail: thousands separators are stripped and
    anything unparsable becomes 0 / 0.0.
    """

    def __init__(self, base_url: str = ExtractionConfig.BASE_URL):
        self.config = ExtractionConfig()
        self.base_url = base_url

    def extract_text_from_cell(self, cell: Optional[Tag]) -> str:
        """
        Extract clean text content from a table cell.

        Args:
            cell: BeautifulSoup Tag containing text data

        Returns:
            Clean text string or empty string if the cell is missing
        """
        if not isinstance(cell, Tag):
            return ""
        return cell.get_text(strip=True)

    @staticmethod
    def to_int(text: Optional[str]) -> int:
        """
        Parse an integer such as "1,234"; returns 0 when unparsable.
        """
        if not text:
            return 0
        clean_text = text.replace(",", "").strip()
        if clean_text in ExtractionConfig.EMPTY_VALUES:
            return 0
        try:
            return int(clean_text)
        except ValueError:
            return 0

    @staticmethod
    def to_float(text: Optional[str]) -> float:
        """
        Parse a real number such as "1.4"; returns 0.0 when unparsable.
        """
        if not text:
            return 0.0
        clean_text = text.replace(",", "").strip()
        if clean_text in ExtractionConfig.EMPTY_VALUES:
            return 0.0
        try:
            return float(clean_text)
        except ValueError:
            return 0.0

    def stat_cell(self, row: Tag, stat: str) -> Optional[Tag]:
        """
        Locate a cell by its ``data-stat`` marker rather than its position.
        """
        return row.select_one(f"[data-stat='{stat}']")

    def stat_text(self, row: Tag, stat: str) -> str:
        return self.extract_text_from_cell(self.stat_cell(row, stat))

    def stat_int(self, row: Tag, stat: str) -> int:
        return self.to_int(self.stat_text(row, stat))

    def stat_float(self, row: Tag, stat: str) -> float:
        return self.to_float(self.stat_text(row, stat))

    def make_absolute_url(self, href: Optional[str]) -> Optional[str]:
        """
        Convert relative URL to absolute URL against the source host.
        """
        if not href:
            return None
        if href.startswith("http"):
            return href
        return urljoin(self.base_url, href)
