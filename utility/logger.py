import logging
import os
from logging.handlers import TimedRotatingFileHandler

# Log output locations and rotation
LOG_DIR = "_logs"               # Directory where logfiles will go
BASE_LOG_NAME = "objective_bot" # Base log name => _logs/objective_bot.log, etc.
LOG_LEVEL_CONSOLE = logging.INFO
LOG_LEVEL_FILE = logging.DEBUG
BACKUP_COUNT = 30               # Keep up to x old log files
# Rotate the file at midnight; add a new file each day
ROTATE_WHEN = "midnight"
ROTATE_INTERVAL = 1

# All modules share the handlers attached to this logger name.
LOGGER_NAME = "ObjectiveBot"

def get_logger():
    """Return a logger configured to log to console and a rotating file."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # The logger's own threshold

    # If it already has handlers, avoid adding them again
    if logger.handlers:
        return logger

    os.makedirs(LOG_DIR, exist_ok=True)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(LOG_LEVEL_CONSOLE)
    console_formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_formatter)

    file_path = os.path.join(LOG_DIR, f"{BASE_LOG_NAME}.log")
    file_handler = TimedRotatingFileHandler(
        filename=file_path,
        when=ROTATE_WHEN,        # "midnight", "D", "H", "M", "S", etc.
        interval=ROTATE_INTERVAL,
        backupCount=BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setLevel(LOG_LEVEL_FILE)
    file_formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger
