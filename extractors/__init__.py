from .base_extractor import BaseDataExtractor
from .extraction_config import ExtractionConfig, MatchReportConfig
from .extractor_fixture import FixtureRowExtractor
from .extractor_match import MatchReportExtractor
from .extractor_team import TeamRowExtractor
from .navigation import PageFetcher, URLParser
from .parsers import FixtureTableParser, MatchLogParser, RosterTableParser, make_soup
from .records import (
    FixtureRow,
    FootballMatchStats,
    MatchContext,
    MatchReport,
    PartialPlayerStats,
    PlayerStats,
    TeamSource,
    TeamStats,
)
from .stats_aggregator import aggregate_team, build_match_stats

__all__ = [
    "BaseDataExtractor",
    "ExtractionConfig",
    "MatchReportConfig",
    "FixtureRowExtractor",
    "TeamRowExtractor",
    "MatchReportExtractor",
    "PageFetcher",
    "URLParser",
    "FixtureTableParser",
    "RosterTableParser",
    "MatchLogParser",
    "make_soup",
    "FixtureRow",
    "TeamSource",
    "MatchContext",
    "PartialPlayerStats",
    "PlayerStats",
    "TeamStats",
    "FootballMatchStats",
    "MatchReport",
    "aggregate_team",
    "build_match_stats",
]
