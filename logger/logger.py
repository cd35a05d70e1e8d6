"""
Log setup for the crawler: colored console output plus a rotating or
per-run log file.
"""
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional, Union

FILE_FORMAT = (
    '%(asctime)s | %(levelname)-8s | %(name)-20s | '
    '%(funcName)-15s:%(lineno)-4d | %(message)s'
)
CONSOLE_FORMAT = '%(asctime)s | %(colored_levelname)s | %(name)-15s | %(message)s'
PLAIN_CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-15s | %(message)s'

# Third-party loggers that drown out crawl progress at INFO
NOISY_LOGGERS = ('urllib3', 'selenium', 'sqlalchemy.engine', 'charset_normalizer')

ROTATIONS = ('session', 'daily', 'size')


class ColoredFormatter(logging.Formatter):
    """Simple colored formatter"""
    COLORS = {
        'DEBUG': '\033[36m', 'INFO': '\033[32m', 'WARNING': '\033[33m',
        'ERROR': '\033[31m', 'CRITICAL': '\033[35m', 'RESET': '\033[0m'
    }

    def format(self, record):
        record.colored_levelname = (
            f"{self.COLORS.get(record.levelname, '')}"
            f"{record.levelname:<8}"
            f"{self.COLORS['RESET']}"
        )
        return super().format(record)


def _console_handler(enable_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    if enable_colors:
        handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    else:
        handler.setFormatter(
            logging.Formatter(PLAIN_CONSOLE_FORMAT, datefmt='%H:%M:%S')
        )
    return handler


def daily_file_handler(log_file: Path, days_to_keep: int = 30) -> logging.Handler:
    """
    Rotates at midnight; old files get a date suffix (``crawler.log.2024-01-15``).
    """
    handler = TimedRotatingFileHandler(
        filename=log_file,
        when='midnight',
        interval=1,
        backupCount=days_to_keep,
        encoding='utf-8',
    )
    handler.suffix = "%Y-%m-%d"
    return handler


def size_file_handler(
    log_file: Path,
    max_file_size: int = 5 * 1024 * 1024,
    backup_count: int = 10,
) -> logging.Handler:
    """
    Rotates by size (``crawler.log``, ``crawler.log.1``, ...).
    """
    return RotatingFileHandler(
        filename=log_file,
        maxBytes=max_file_size,
        backupCount=backup_count,
        encoding='utf-8',
    )


def session_file_handler(log_dir: Path, session_name: str) -> logging.Handler:
    """
    One new file per run, e.g. ``crawler_2024-01-15_14-30-25.log``.
    """
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return logging.FileHandler(
        log_dir / f"{session_name}_{timestamp}.log", encoding='utf-8'
    )


def build_file_handler(
    log_dir: Union[str, Path], session_name: str, rotation: str
) -> logging.Handler:
    if rotation not in ROTATIONS:
        raise ValueError(f"Unknown log rotation '{rotation}', expected one of {ROTATIONS}")

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if rotation == 'daily':
        return daily_file_handler(log_dir / f"{session_name}.log")
    if rotation == 'size':
        return size_file_handler(log_dir / f"{session_name}.log")
    return session_file_handler(log_dir, session_name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = "logs",
    session_name: str = "crawler",
    enable_colors: bool = True,
    rotation: str = "session",
) -> logging.Logger:
    """
    Wire the root logger so every module's ``logging.getLogger(__name__)``
    ends up on the console and, when ``log_dir`` is given, in a log file.

    Args:
        level: Level name or number for the root logger
        log_dir: Directory for the log file, or None for console only
        session_name: Log file name prefix
        enable_colors: Use ANSI colors on the console
        rotation: "session" (file per run), "daily" or "size"

    Returns:
        The configured root logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if log_dir:
        file_handler = build_file_handler(log_dir, session_name, rotation)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
        )
        root.addHandler(file_handler)
    root.addHandler(_console_handler(enable_colors))

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root
