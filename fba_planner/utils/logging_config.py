"""
Logging configuration for fba-planner.

Every module logs through ``logging.getLogger(__name__)``; all of them sit
under the ``fba_planner`` logger, which is the one configured here:
- Rotating file log (warnings and errors by default)
- Console output (critical only by default, lowered by the CLI --verbose flag)
"""
import logging
import logging.handlers
from pathlib import Path
from datetime import datetime

PACKAGE_LOGGER = "fba_planner"
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def setup_logging(
    log_dir: "str | Path | None" = None,
    app_name: str = PACKAGE_LOGGER,
    file_level: int = logging.WARNING,
    console_level: int = logging.CRITICAL,
) -> logging.Logger:
    """
    Attach file and console handlers to the package logger.

    Args:
        log_dir: Directory for log files (created if missing).  When *None*
                 the default location from utils.paths is used.
        app_name: Logger to configure (also the log file prefix)
        file_level: Minimum level written to the log file
        console_level: Minimum level echoed to stderr

    Returns:
        Configured logger instance (handlers are only added once)
    """
    if log_dir is None:
        from .paths import get_logs_dir  # noqa: PLC0415
        log_path = get_logs_dir()
    else:
        log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(app_name)
    logger.setLevel(logging.DEBUG)

    if logger.handlers:
        return logger

    # Rotating log: 5MB, 3 backups
    log_file = log_path / f"{app_name}_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding='utf-8',
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    return logger
