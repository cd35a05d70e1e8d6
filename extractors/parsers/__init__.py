from .base_parser import BaseParser
from .fixture_parser import FixtureTableParser
from .html_parser import make_soup
from .parser_config import ParserConfig
from .schedule_parser import MatchLogParser
from .team_parser import RosterTableParser

__all__ = [
    "ParserConfig",
    "BaseParser",
    "FixtureTableParser",
    "RosterTableParser",
    "MatchLogParser",
    "make_soup",
]
