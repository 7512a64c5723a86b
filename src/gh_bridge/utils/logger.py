"""
Logging utilities for gh-bridge.
"""
import logging
import logging.handlers
import sys
from pathlib import Path

from gh_bridge.config import get_settings


class ColoredFormatter(logging.Formatter):
    """Formatter that colours console records by level."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        formatted = super().format(record)

        if getattr(record, 'console_output', False):
            color = self.COLORS.get(record.levelname, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


class _ConsoleFilter(logging.Filter):
    """Marks records that go to the console so they get coloured."""

    def filter(self, record):
        record.console_output = True
        return True


class LoggerSetup:
    """Handles logger setup and configuration."""

    _loggers_configured = False
    _file_handler = None
    _console_handler = None

    @classmethod
    def setup_logging(cls, force_reconfigure: bool = False) -> None:
        """Set up logging configuration based on settings."""
        if cls._loggers_configured and not force_reconfigure:
            return

        settings = get_settings()

        log_file_path = Path(settings.logging.file).expanduser()
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()

        if force_reconfigure:
            for handler in (cls._file_handler, cls._console_handler):
                if handler is not None:
                    root_logger.removeHandler(handler)
                    handler.close()
            cls._file_handler = None
            cls._console_handler = None

        log_level = getattr(logging, settings.app.log_level.upper(), logging.INFO)
        root_logger.setLevel(log_level)

        file_formatter = logging.Formatter(
            fmt=settings.logging.format,
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_formatter = ColoredFormatter(
            fmt='%(levelname)-8s | %(name)-20s | %(message)s',
            datefmt='%H:%M:%S'
        )

        if cls._file_handler is None:
            cls._file_handler = logging.handlers.RotatingFileHandler(
                filename=str(log_file_path),
                maxBytes=settings.logging.max_size_mb * 1024 * 1024,
                backupCount=settings.logging.backup_count,
                encoding='utf-8'
            )
            cls._file_handler.setFormatter(file_formatter)
            cls._file_handler.setLevel(log_level)
            root_logger.addHandler(cls._file_handler)

        # stderr keeps command output on stdout clean
        if cls._console_handler is None:
            cls._console_handler = logging.StreamHandler(sys.stderr)
            cls._console_handler.setFormatter(console_formatter)

            console_level = logging.DEBUG if settings.app.debug else logging.WARNING
            cls._console_handler.setLevel(console_level)
            cls._console_handler.addFilter(_ConsoleFilter())
            root_logger.addHandler(cls._console_handler)

        cls._setup_third_party_loggers(log_level)

        cls._loggers_configured = True

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured - Level: {settings.app.log_level}, File: {log_file_path}")

    @classmethod
    def _setup_third_party_loggers(cls, our_level: int) -> None:
        """Quieten the HTTP and git libraries; our package follows the app level."""
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("github").setLevel(logging.WARNING)
        logging.getLogger("git").setLevel(logging.WARNING)

        logging.getLogger("gh_bridge").setLevel(our_level)

    @classmethod
    def reconfigure(cls) -> None:
        """Reconfigure logging (useful when settings change)."""
        cls._loggers_configured = False
        cls.setup_logging(force_reconfigure=True)


def get_logger(name: str) -> logging.Logger:
    """Get a logger, setting up logging on first use."""
    LoggerSetup.setup_logging()
    return logging.getLogger(name)
