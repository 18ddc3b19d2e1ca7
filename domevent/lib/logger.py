import logging
import logging.handlers
from datetime import datetime
from pathlib import Path

from domevent.constants import DEFAULT_MAX_LOG_FILES


def clean_old_logs(log_dir: Path, max_files: int = DEFAULT_MAX_LOG_FILES):
    """Remove old log files, keeping only the most recent `max_files` logs

    Log files are sorted by modification time and the oldest are removed until
    only `max_files` remain.

    Args:
        log_dir (Path): The directory where the log files are stored.
        max_files (int, optional): The maximum number of log files to keep. Defaults to 5.
    """
    log_files = sorted(log_dir.glob("*.log"), key=lambda p: p.stat().st_mtime)
    while len(log_files) > max_files:
        old_log = log_files.pop(0)
        old_log.unlink()


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)
        return super().format(record)


def configure_logger(
    log_level: int = logging.WARNING,
    log_dir: Path | None = None,
    max_log_files: int = DEFAULT_MAX_LOG_FILES,
) -> list[logging.Handler]:
    """Configures the domevent loggers with a console handler and an optional log file

    The console formatter only shows the level and message. When `log_dir` is given, a
    rotating log file named after the current date and time is also written there, with
    the full timestamp on every line, and old log files beyond `max_log_files` are removed.

    Only the `domevent` logger hierarchy is configured so that embedding applications
    keep control of the root logger.

    Args:
        log_level (int): The log level to log at. logging.[DEBUG | INFO | ERROR | CRITICAL | WARN ].
            Defaults to logging.WARNING.
        log_dir (Path | None): Where to store log files. Defaults to console only.
        max_log_files (int): Keeps only the previous (n) number of log files. Defaults to 5.

    Returns:
        list[logging.Handler]: The handlers attached to the `domevent` logger.
    """
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    handlers: list[logging.Handler] = [stream_handler]

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(exist_ok=True, parents=True)

        log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=10 * 1024**2, backupCount=5
        )
        file_handler.setFormatter(
            CustomFormatter("[%(asctime)s] %(levelname)s %(message)s", datefmt="%d.%m.%Y %H:%M:%S")
        )
        handlers.append(file_handler)
        # Prune once the new file exists so it counts towards max_log_files
        clean_old_logs(log_dir=log_dir, max_files=max_log_files)

    package_logger = logging.getLogger("domevent")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    return handlers
