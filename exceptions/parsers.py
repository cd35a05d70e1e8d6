# exceptions/parsers.py
"""
Errors raised while reading tables out of fetched pages.
"""


class ParsingError(Exception):
    """
    Base for page-shape problems. A crawl records the page as failed
    and moves on.
    """

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error
        self.message = message

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message} (caused by {self.original_error!r})"
        return self.message


class NoSuitableTable(ParsingError):
    """
    A required structure is missing altogether, e.g. no roster table on a
    league page or no scorebox on a match report.
    """

    def __init__(self, table_type: str = "table"):
        super().__init__(f"No suitable {table_type} table found in HTML content")
        self.table_type = table_type
