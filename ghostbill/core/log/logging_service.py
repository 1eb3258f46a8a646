import logging
from logging.handlers import RotatingFileHandler
import os

LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "logs/ghostbill.log")
FILE_LOG_LEVEL = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
CONSOLE_LOG_LEVEL = os.getenv("CONSOLE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"

def _file_handler(formatter: logging.Formatter) -> RotatingFileHandler:
    log_dir = os.path.dirname(LOG_FILE_PATH)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(LOG_FILE_PATH, maxBytes=5 * 1024 * 1024, backupCount=3)
    handler.setLevel(FILE_LOG_LEVEL)
    handler.setFormatter(formatter)
    return handler

def get_logger(name: str) -> logging.Logger:
    """
    Returns a module logger writing to a rotating file and the console.

    Handlers are attached once per logger name, so calling this at import
    time in every module is safe.

    Args:
        name (str): Name of the logger (usually the module name).

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(CONSOLE_LOG_LEVEL)
    console_handler.setFormatter(formatter)

    logger.addHandler(_file_handler(formatter))
    logger.addHandler(console_handler)
    # uvicorn configures the root logger too; avoid printing twice
    logger.propagate = False
    return logger
