from detevo.evolution.engine.config import EngineConfig
from detevo.evolution.engine.core import Evolution, GenerationView
from detevo.evolution.engine.log import GenerationLog, GenerationRecord
from detevo.evolution.engine.metrics import EngineMetrics

__all__ = [
    "EngineConfig",
    "EngineMetrics",
    "Evolution",
    "GenerationLog",
    "GenerationRecord",
    "GenerationView",
]
