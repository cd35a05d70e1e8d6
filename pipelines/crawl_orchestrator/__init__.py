from .base_orchestrator import BaseOrchestrator
from .league_orchestrator import CrawlOrchestrator
from .orchestrator_config import OrchestratorConfig
from .orchestrator_utils import BatchReport, OrchestratorUtils

__all__ = [
    "BaseOrchestrator",
    "CrawlOrchestrator",
    "OrchestratorConfig",
    "OrchestratorUtils",
    "BatchReport",
]
