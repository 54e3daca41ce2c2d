from detevo.population.population import Population

__all__ = ["Population"]
