import logging
from logging.handlers import RotatingFileHandler
import os

from app.config import settings


def setup_logging():
    """
    Konfiguriert den 'app'-Logger (Konsole + rotierende Datei).
    Mehrfacher Aufruf ist harmlos, Handler werden nur einmal angehängt.
    """
    logger = logging.getLogger("app")
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    os.makedirs(settings.log_dir, exist_ok=True)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))

    file_handler = RotatingFileHandler(
        os.path.join(settings.log_dir, "reservations.log"),
        maxBytes=10_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    # APScheduler loggt jeden Job-Lauf auf INFO
    logging.getLogger("apscheduler").setLevel(logging.WARNING)

    return logger
