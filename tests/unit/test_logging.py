"""Tests for the file logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from app import create_app
from main import setup_logging


def test_setup_logging_writes_rotating_file(tmp_path) -> None:
    log_dir = tmp_path / "logs"
    app = create_app(test_config={
        "TESTING": True,
        "RATELIMIT_ENABLED": False,
        "LOG_DIR": str(log_dir),
    })

    setup_logging(app)
    try:
        handlers = [h for h in app.logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 1000000
        assert handlers[0].backupCount == 5

        app.logger.info("hello from the weather service")
        handlers[0].flush()

        content = (log_dir / "weather_service.log").read_text()
        assert "INFO: hello from the weather service" in content
    finally:
        for logger in (app.logger, logging.getLogger("app.services")):
            for handler in [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]:
                logger.removeHandler(handler)
                handler.close()
