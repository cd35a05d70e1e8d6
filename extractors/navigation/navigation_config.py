# extractors/navigation/navigation_config.py
"""
URL shapes of the statistics source.
"""


class NavigationConfig:
    """
    Configuration constants for building and parsing source URLs.
    """

    BASE_URL = "https://fbref.com"
    SQUADS_SEGMENT = "squads"
    SQUAD_PROFILE_PATH = "/en/squads/{squad_id}/"
    MATCHLOG_PATH = "{season}/matchlogs/all_comps/schedule/"
    SYNTHETIC_SCHEME = "fixture://"
    SYNTHETIC_FIXTURE_URL = SYNTHETIC_SCHEME + "{date}/{home}/{away}"

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url.rstrip("/")
