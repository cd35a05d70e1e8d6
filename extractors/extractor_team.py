# extractors/extractor_team.py
"""
Row-level extraction for league roster / standings tables.
"""

from typing import Optional

from bs4 import Tag

from extractors.navigation.navigation_config import NavigationConfig
from extractors.navigation.url_parser import URLParser

from .base_extractor import BaseDataExtractor
from .records import TeamSource

TEAM_LINK_SELECTOR = "[data-stat='squad'] a, [data-stat='team'] a"


class TeamRowExtractor(BaseDataExtractor):
    """
    Extracts ``TeamSource`` records from roster rows.
    """

    def __init__(self, base_url: str = NavigationConfig.BASE_URL):
        super().__init__(base_url)
        self.url_parser = URLParser(NavigationConfig(base_url))

    def extract_team_from_row(self, row: Tag) -> Optional[TeamSource]:
        """
        Args:
            row: Roster table row

        Returns:
            TeamSource, or None when the row has no squad link
        """
        link = row.select_one(TEAM_LINK_SELECTOR)
        if link is None:
            return None

        name = self.extract_text_from_cell(link)
        squad_id = self.url_parser.extract_squad_id(link.get("href"))
        if not name or not squad_id:
            return None

        return TeamSource(
            name=name,
            id=squad_id,
            base_url=self.url_parser.squad_profile_url(squad_id),
        )
