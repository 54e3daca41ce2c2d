from detevo.evolution.engine import (
    EngineConfig,
    EngineMetrics,
    Evolution,
    GenerationLog,
    GenerationRecord,
    GenerationView,
)
from detevo.evolution.hall_of_fame import BestN, HallOfFame, HallOfFameEntry
from detevo.evolution.stats import FitnessStats

__all__ = [
    "BestN",
    "EngineConfig",
    "EngineMetrics",
    "Evolution",
    "FitnessStats",
    "GenerationLog",
    "GenerationRecord",
    "GenerationView",
    "HallOfFame",
    "HallOfFameEntry",
]
