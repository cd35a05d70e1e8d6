# extractors/parsers/base_parser.py
"""
Base parser class providing common functionality for all HTML parsers.
Contains shared methods and utilities used by specific parser implementations.
"""

from typing import List

from bs4 import Tag

from .parser_config import ParserConfig


class BaseParser:
    """
    Base class for all HTML parsers providing common functionality.
    Contains shared methods for row filtering and basic table operations.
    """

    def __init__(self):
        self.config = ParserConfig()

    def _should_skip_header_row(self, row: Tag) -> bool:
        """
        Repeated header rows inside a body carry the ``thead`` class.

        Args:
            row: BeautifulSoup row element to check

        Returns:
            True if the row is a repeated header and should be skipped
        """
        return any(self.config.HEADER_ROW_CLASS in cls for cls in row.get("class", []))

    def _get_table_rows_from_table(self, table: Tag) -> List[Tag]:
        """
        Extract table rows from a table element, checking tbody first.
        """
        tbody = table.find(self.config.TABLE_BODY_SELECTOR) or table
        return tbody.find_all(self.config.TABLE_ROW_SELECTOR)

    def _get_data_rows(self, table: Tag) -> List[Tag]:
        return [
            row
            for row in self._get_table_rows_from_table(table)
            if not self._should_skip_header_row(row)
        ]
