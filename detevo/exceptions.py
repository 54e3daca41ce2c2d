class DetEvoError(Exception):
    """Base for all detevo exceptions."""

    pass


# High-level families
class ConfigurationError(DetEvoError, ValueError):
    """Invalid algorithm, archive or engine configuration."""

    pass


class EvolutionError(DetEvoError):
    """Evolution process failures."""

    pass


# Solution contract violations
class FitnessError(EvolutionError):
    """A solution returned a fitness that cannot be ordered (e.g. NaN)."""

    pass
