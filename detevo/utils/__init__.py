from detevo.utils.logger_setup import setup_logger
from detevo.utils.worker_pool import WorkerPool, default_workers

__all__ = ["WorkerPool", "default_workers", "setup_logger"]
