from detevo.evolution.strategies.selectors import (
    BestSelector,
    RandomSelector,
    SelectionOperator,
    TournamentSelector,
)

__all__ = [
    "BestSelector",
    "RandomSelector",
    "SelectionOperator",
    "TournamentSelector",
]
