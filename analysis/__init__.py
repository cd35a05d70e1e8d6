from .prediction_engine import (
    MatchPrediction,
    PredictionEngine,
    score_grid,
    strength_ratio,
)

__all__ = ["MatchPrediction", "PredictionEngine", "score_grid", "strength_ratio"]
