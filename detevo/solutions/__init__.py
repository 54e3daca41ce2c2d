from detevo.solutions.contract import Solution
from detevo.solutions.fitness import MultiObjective, fitness_to_float, is_nan_fitness
from detevo.solutions.individual import (
    UNEVALUATED,
    Evaluated,
    FitnessState,
    Individual,
)

__all__ = [
    "UNEVALUATED",
    "Evaluated",
    "FitnessState",
    "Individual",
    "MultiObjective",
    "Solution",
    "fitness_to_float",
    "is_nan_fitness",
]
