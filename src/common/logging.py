import logging
import time
from functools import wraps
from typing import Callable

def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Sets up a logger with a standard format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger

def log_execution_time(logger: logging.Logger):
    """
    Decorator to measure and log execution time of a function.
    Failures are logged and re-raised untouched.
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.time()
            try:
                result = func(*args, **kwargs)
                elapsed = time.time() - start
                logger.debug(f"{func.__name__} executed in {elapsed:.3f}s")
                return result
            except Exception as e:
                logger.warning(f"{func.__name__} failed after {time.time() - start:.3f}s: {e}")
                raise
        return wrapper
    return decorator

def set_log_level(level, prefix: str = "src"):
    """
    Applies `level` to every logger already created under `prefix`.
    """
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            logger.setLevel(level)
