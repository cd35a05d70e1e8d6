# pipelines/crawl_orchestrator/orchestrator_config.py
"""
Configuration constants for orchestrator classes.
"""


class OrchestratorConfig:
    """
    Configuration constants for orchestrator operations.
    """

    # ***> Report page readiness <***
    REPORT_MODE_FETCH: str = "fetch"
    REPORT_MODE_BROWSER: str = "browser"

    # ***> String formatting templates <***
    URL_TRUNCATE_LENGTH: int = 60
    URL_DISPLAY_LENGTH: int = 80
    URL_ELLIPSIS: str = "..."
