"""detevo: reproducible evolutionary computation.

Every random decision is drawn from a stream derived from one global seed, so
a run repeats exactly for a given seed regardless of the worker count.
"""

from detevo.evolution import (
    BestN,
    EngineConfig,
    Evolution,
    FitnessStats,
    GenerationLog,
    GenerationRecord,
    GenerationView,
    HallOfFame,
    HallOfFameEntry,
)
from detevo.evolution.algorithms import MuCommaLambda, MuPlusLambda, Simple
from detevo.evolution.strategies import (
    BestSelector,
    RandomSelector,
    SelectionOperator,
    TournamentSelector,
)
from detevo.exceptions import (
    ConfigurationError,
    DetEvoError,
    EvolutionError,
    FitnessError,
)
from detevo.population import Population
from detevo.rng import DeterministicRng, resolve_seed
from detevo.solutions import Individual, MultiObjective, Solution

__version__ = "0.1.0"

__all__ = [
    "BestN",
    "BestSelector",
    "ConfigurationError",
    "DetEvoError",
    "DeterministicRng",
    "EngineConfig",
    "Evolution",
    "EvolutionError",
    "FitnessError",
    "FitnessStats",
    "GenerationLog",
    "GenerationRecord",
    "GenerationView",
    "HallOfFame",
    "HallOfFameEntry",
    "Individual",
    "MultiObjective",
    "MuCommaLambda",
    "MuPlusLambda",
    "Population",
    "RandomSelector",
    "SelectionOperator",
    "Simple",
    "Solution",
    "TournamentSelector",
    "resolve_seed",
]
