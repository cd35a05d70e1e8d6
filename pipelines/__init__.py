# pipelines/__init__.py
"""
Pipeline module initialization.
Exports the crawl orchestrator and the command facade.
"""

from .commands import FootballCommands, MatchAnalysis, MatchPreview
from .crawl_orchestrator import BatchReport, CrawlOrchestrator, OrchestratorConfig

__all__ = [
    "CrawlOrchestrator",
    "OrchestratorConfig",
    "BatchReport",
    "FootballCommands",
    "MatchPreview",
    "MatchAnalysis",
]
