from detevo.config.helpers import build_config

__all__ = ["build_config"]
