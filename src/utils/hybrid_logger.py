"""
Hybrid logger - console + file logging with per-class loggers

Log lines look like:
    [12:04:31.207] [INFO] [SequenceController] State transition: PLAYING_INTRO → AWAITING_MAIN_SEQUENCE_START

Timestamps carry milliseconds because the presentation is choreographed in
milliseconds; the kiosk runs unattended, so old log files are pruned on start.
"""

import logging
import sys
import traceback
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for stdout and brackets format"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[94m',    # Blue
        'INFO': '\033[92m',     # Green
        'WARNING': '\033[93m',  # Yellow
        'ERROR': '\033[91m',    # Red
        'CRITICAL': '\033[95m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def __init__(self, use_colors: bool = False):
        self.use_colors = use_colors
        # Format: [time.ms] [level] [class] message
        super().__init__(
            '[%(asctime)s.%(msecs)03d] [%(levelname)s] [%(class_name)s] %(message)s',
            datefmt='%H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, 'class_name'):
            record.class_name = 'Main'

        formatted = super().format(record)
        if not self.use_colors:
            return formatted

        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        return f"{color}{formatted}{self.COLORS['RESET']}"


class ClassLogger:
    """
    Per-component logger sharing the main logger's handlers.

    Each component gets its own name in the [class] column and its own
    minimum level, so e.g. the scheduler can stay at INFO while the controller
    logs DEBUG.
    """

    def __init__(self, main_logger: logging.Logger, class_name: str, level: int):
        self.main_logger = main_logger
        self.class_name = class_name
        self.level = level

    def is_enabled_for(self, level: int) -> bool:
        return level >= self.level

    def _log(self, level: int, message: str, exc_info: bool = False) -> None:
        if not self.is_enabled_for(level):
            return
        record = self.main_logger.makeRecord(
            self.main_logger.name, level, "", 0, message, (),
            sys.exc_info() if exc_info else None
        )
        record.class_name = self.class_name
        self.main_logger.handle(record)

    def debug(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: str, exception: Optional[BaseException] = None) -> None:
        """
        Log error message, with exception type/file/line when given.

        Errors are flushed immediately so they survive an abrupt process end.
        """
        if exception is None:
            self._log(logging.ERROR, message)
            return

        frames = traceback.extract_tb(exception.__traceback__)
        location = f"File: {frames[-1].filename} | Line: {frames[-1].lineno}" if frames else "File: unknown | Line: 0"
        self._log(logging.ERROR, f"{message} | Type: {type(exception).__name__} | {location}", exc_info=True)
        self.flush()

    def critical(self, message: str) -> None:
        self._log(logging.CRITICAL, message)
        self.flush()

    def create_class_logger(self, class_name: str, level: Optional[int] = None) -> 'ClassLogger':
        """
        Create a sibling logger that writes to the same handlers.

        Args:
            class_name: Name shown in the [class] column
            level: Minimum log level (defaults to this logger's level)

        Returns:
            ClassLogger: New logger sharing the main logger's handlers
        """
        return ClassLogger(self.main_logger, class_name, self.level if level is None else level)

    def flush(self) -> None:
        """Flush all handlers (call before anything that may kill the process)"""
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()


class HybridLogger:
    """
    Logger factory: one colored console handler plus one timestamped file per run.

    Usage:
        main_logger = HybridLogger("CalmGuideKiosk", log_dir="logs")
        kiosk_logger = main_logger.get_class_logger("Kiosk", logging.INFO)
        controller_logger = kiosk_logger.create_class_logger("SequenceController", logging.DEBUG)
        ...
        main_logger.cleanup()
    """

    def __init__(self, name: str = "app", log_dir: str = "logs", console: bool = True, keep_files: int = 20):
        """
        Args:
            name: Logger name, also the log file prefix
            log_dir: Directory for log files (created if missing)
            console: Also log to stdout with colors
            keep_files: Number of most recent log files of this name to keep
        """
        self.name = name
        self.log_dir = Path(log_dir)
        self.console = console
        self.keep_files = keep_files
        self.log_file: Optional[Path] = None
        self.main_logger: Optional[logging.Logger] = None
        self.class_loggers: Dict[str, ClassLogger] = {}
        self._setup_main_logger()

    def _setup_main_logger(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._prune_old_logs()

        self.log_file = self.log_dir / f"{self.name}_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"

        self.main_logger = logging.getLogger(self.name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False
        self.main_logger.handlers.clear()

        if self.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(ColoredFormatter(use_colors=True))
            self.main_logger.addHandler(console_handler)

        file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        file_handler.setFormatter(ColoredFormatter(use_colors=False))
        self.main_logger.addHandler(file_handler)

    def _prune_old_logs(self) -> None:
        """Delete the oldest log files so that a new one keeps the total at keep_files"""
        old_logs: List[Path] = sorted(self.log_dir.glob(f"{self.name}_*.log"))
        excess = len(old_logs) - max(0, self.keep_files - 1)
        for path in old_logs[:max(0, excess)]:
            with suppress(OSError):
                path.unlink()

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Get a logger for a specific class with custom log level

        Args:
            class_name: Name of the class for log identification
            level: Minimum log level (logging.DEBUG, INFO, WARNING, ERROR, CRITICAL)

        Returns:
            ClassLogger: Logger instance for the specified class
        """
        if class_name not in self.class_loggers:
            self.class_loggers[class_name] = ClassLogger(self.main_logger, class_name, level)
        return self.class_loggers[class_name]

    def get_main_logger(self, level: int = logging.INFO) -> ClassLogger:
        """Get the main application logger (class_name="Main")"""
        return self.get_class_logger("Main", level)

    def cleanup(self) -> None:
        """Flush and close all handlers"""
        if self.main_logger is None:
            return
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()
                handler.close()
        self.main_logger.handlers.clear()
