from detevo.evolution.algorithms.base import Algorithm, StepContext, VariationConfig
from detevo.evolution.algorithms.mu_comma_lambda import MuCommaLambda, MuCommaLambdaConfig
from detevo.evolution.algorithms.mu_plus_lambda import MuPlusLambda, MuPlusLambdaConfig
from detevo.evolution.algorithms.simple import Simple, SimpleConfig
from detevo.evolution.algorithms.variation import VariationCounts, vary, vary_or, vary_pairs

__all__ = [
    "Algorithm",
    "MuCommaLambda",
    "MuCommaLambdaConfig",
    "MuPlusLambda",
    "MuPlusLambdaConfig",
    "Simple",
    "SimpleConfig",
    "StepContext",
    "VariationConfig",
    "VariationCounts",
    "vary",
    "vary_or",
    "vary_pairs",
]
