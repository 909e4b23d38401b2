# backend/language_lines/utils/logging_config.py
"""
Configure logging for the language panel commands.
"""
import logging
import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
LOG_DIR = os.path.join(BASE_DIR, "logs")


def setup_logging(verbosity: int = 1):
    """Set up file and console logging; verbosity follows Django's -v option."""
    os.makedirs(LOG_DIR, exist_ok=True)
    level = logging.DEBUG if verbosity > 1 else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=[
            logging.FileHandler(os.path.join(LOG_DIR, "language_panel.log")),
            logging.StreamHandler(),  # Single console handler
        ],
    )
    logging.getLogger("language_lines").setLevel(level)
