import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

import yaml

from camera_viewer import DEFAULT_PATH

ROOT_LOGGER_NAME = "camera_viewer"


def load_logging_config() -> dict:
    config_path = DEFAULT_PATH / "config.yaml"
    try:
        with open(config_path, "r") as file:
            config = yaml.safe_load(file) or {}
    except (OSError, yaml.YAMLError):
        return {}

    if not isinstance(config, dict):
        return {}
    return config.get("logging", {}) or {}


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }

    BOLD = "\033[1m"
    RESET = "\033[0m"

    def __init__(self, *args, use_colors=True, **kwargs):
        super().__init__(*args, **kwargs)
        self.use_colors = use_colors and self._supports_color()

    @staticmethod
    def _supports_color() -> bool:
        return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def format(self, record):
        formatted = super().format(record)
        if not self.use_colors:
            return formatted

        level_color = self.COLORS.get(record.levelname)
        if not level_color:
            return formatted

        colored_level = f"{self.BOLD}{level_color}{record.levelname}{self.RESET}"
        return formatted.replace(record.levelname, colored_level, 1)


class LoggerFactory:
    _initialized = False
    _log_dir: Optional[Path] = None

    FORMATS = {
        "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "detailed": (
            "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - "
            "%(message)s"
        ),
    }

    @classmethod
    def setup_logging(
        cls,
        log_level: str = "INFO",
        log_dir: Optional[str] = None,
        console_output: bool = True,
        file_output: bool = True,
        format_type: str = "detailed",
        use_colors: bool = True,
    ) -> None:
        """
        Configure logging for the viewer.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files. If None, uses project root/logs
            console_output: Whether to log to the console
            file_output: Whether to log to rotating files
            format_type: Format type ('detailed' or 'simple')
            use_colors: Whether to color the console level names
        """
        if cls._initialized:
            return

        log_format = cls.FORMATS.get(format_type, cls.FORMATS["detailed"])

        config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": log_format, "datefmt": "%Y-%m-%d %H:%M:%S"},
                "colored": {
                    "()": ColoredFormatter,
                    "format": log_format,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                    "use_colors": use_colors,
                },
            },
            "handlers": {},
            "loggers": {
                ROOT_LOGGER_NAME: {
                    "level": log_level,
                    "handlers": [],
                    "propagate": False,
                },
            },
        }
        handlers = config["loggers"][ROOT_LOGGER_NAME]["handlers"]

        if console_output:
            config["handlers"]["console"] = {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "colored",
                "stream": "ext://sys.stderr",
            }
            handlers.append("console")

        if file_output:
            cls._log_dir = Path(log_dir) if log_dir else DEFAULT_PATH / "logs"
            cls._log_dir.mkdir(parents=True, exist_ok=True)

            config["handlers"]["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": log_level,
                "formatter": "standard",
                "filename": str(cls._log_dir / "camera_viewer.log"),
                "maxBytes": 5242880,
                "backupCount": 3,
            }
            handlers.append("file")

        logging.config.dictConfig(config)
        cls._initialized = True

        logging.getLogger(f"{ROOT_LOGGER_NAME}.logging_config").debug(
            f"Logging initialized - Level: {log_level}, Log dir: {cls._log_dir}"
        )

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._initialized:
            logging_config = load_logging_config()
            cls.setup_logging(
                log_level=logging_config.get("level", "INFO"),
                console_output=logging_config.get("console_output", True),
                file_output=logging_config.get("file_output", True),
                format_type=logging_config.get("format_type", "detailed"),
                use_colors=logging_config.get("use_colors", True),
            )

        if not name.startswith(ROOT_LOGGER_NAME):
            if name == "__main__":
                name = f"{ROOT_LOGGER_NAME}.main"
            else:
                name = f"{ROOT_LOGGER_NAME}.{name}"

        return logging.getLogger(name)


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger under the ``camera_viewer`` hierarchy.

    Args:
        name: Logger name. If None, uses the calling module's __name__
    """
    if name is None:
        frame = sys._getframe(1)
        name = frame.f_globals.get("__name__", "unknown")

    return LoggerFactory.get_logger(name)


def setup_logging(**kwargs) -> None:
    LoggerFactory.setup_logging(**kwargs)
