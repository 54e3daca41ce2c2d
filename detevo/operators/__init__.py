"""Ready-made crossover and mutation operators for array genomes."""

from detevo.operators import crossover, mutation

__all__ = ["crossover", "mutation"]
