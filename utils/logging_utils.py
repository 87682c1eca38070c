import logging
from config import config

def setup_logging():
    """
    Configure logging level based on debug mode setting.
    Non-debug mode uses WARNING level to minimize console output.
    Debug mode uses INFO level for detailed rep tracking.
    Safe to call again after the mode changes.
    """
    if config.debug_mode == "non_debug":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    engine_logger = logging.getLogger("pushup_counter")
    engine_logger.setLevel(level)
    return engine_logger

# Global logger instance - import this in other modules
logger = setup_logging()
