from typelocator.logging.logger import LEVELS, configure_logging, get_logger

__all__ = ["LEVELS", "configure_logging", "get_logger"]
