import logging
import os


def init_logging(app):
    """Configure global logging for the entire Flask app."""
    handlers = [logging.StreamHandler()]

    log_file = app.config.get("LOG_FILE", "")
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    log_level = app.config.get("LOG_LEVEL", "INFO").upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s",
        handlers=handlers,
    )

    app.logger = logging.getLogger("attendance_api")
    app.logger.setLevel(numeric_level)
    app.logger.info("Logging initialized at %s level", log_level)
