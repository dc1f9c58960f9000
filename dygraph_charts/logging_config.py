"""
Logging setup for scripts and notebooks that build dygraph charts
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ERROR_FORMAT = LOG_FORMAT + '\n%(pathname)s:%(lineno)d'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _rotating_handler(path: Path, level: int, fmt: str, max_mb: int, backups: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_mb * 1024 * 1024, backupCount=backups, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(log_dir: Optional[Union[str, Path]] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Log to the console and, when log_dir is given, to rotating files:

    - dygraph_charts.log: every dygraph_charts record, debug included
    - errors.log: errors from any logger, with source location
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(console)

    if log_dir is None:
        return root

    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger('dygraph_charts')
    for old in [h for h in package_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]:
        package_logger.removeHandler(old)
        old.close()
    package_logger.addHandler(
        _rotating_handler(logs_dir / "dygraph_charts.log", logging.DEBUG, LOG_FORMAT, max_mb=5, backups=3)
    )
    package_logger.setLevel(min(level, logging.DEBUG))

    root.addHandler(
        _rotating_handler(logs_dir / "errors.log", logging.ERROR, ERROR_FORMAT, max_mb=10, backups=5)
    )

    logging.info(f"Logging configured - Logs directory: {logs_dir}")
    return root
