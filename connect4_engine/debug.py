"""
debug.py - Logging facade for the Connect Four engine

Wraps a standard library logger with engine-specific levels, per-component
filtering and simple performance timers. The level can be preset through the
CONNECT4_DEBUG environment variable (none, error, warning, info, debug, trace).
"""

import logging
import os
import sys
import time
from enum import Enum
from typing import Dict, Iterable, Optional, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# TRACE sits below DEBUG so it is only shown when explicitly requested
TRACE = logging.DEBUG - 5
logging.addLevelName(TRACE, "TRACE")

LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: TRACE,
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ENV_VAR = "CONNECT4_DEBUG"


class DebugManager:
    """Routes engine log messages to the ``connect4_engine`` logger."""

    def __init__(self, name: str = "connect4_engine"):
        self._logger = logging.getLogger(name)
        self._level = DebugLevel.WARNING
        self._components: Set[str] = set()  # Empty set means all components
        self._timers: Dict[str, float] = {}
        self._file_handler: Optional[logging.FileHandler] = None

        if not self._logger.handlers:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            self._logger.addHandler(console)
        self._logger.propagate = True

        env_level = os.environ.get(ENV_VAR)
        if env_level:
            self.set_from_string(env_level)
        else:
            self.configure(level=self._level)

    @property
    def level(self) -> DebugLevel:
        return self._level

    def configure(self, level: Optional[DebugLevel] = None,
                  log_file: Optional[str] = None,
                  components: Optional[Iterable[str]] = None) -> None:
        """
        Configure the debug manager settings.

        Args:
            level: Debug level to set
            log_file: Path to log file ('' removes an existing file handler)
            components: Components to log for (empty for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if log_file is not None:
            if self._file_handler is not None:
                self._logger.removeHandler(self._file_handler)
                self._file_handler.close()
                self._file_handler = None
            if log_file:
                self._file_handler = logging.FileHandler(log_file)
                self._file_handler.setFormatter(
                    logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(self._file_handler)

        if components is not None:
            self._components = set(components)

    def set_from_string(self, level_str: str) -> None:
        """Set debug level from a string (for command line arguments)."""
        try:
            level = DebugLevel[level_str.strip().upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}", "debug")
            return
        self.configure(level=level)

    def enabled_for(self, level: DebugLevel, component: Optional[str] = None) -> bool:
        """Check whether a message at ``level`` for ``component`` would be emitted."""
        if level == DebugLevel.NONE or not self._logger.isEnabledFor(LEVEL_MAP[level]):
            return False
        if component and self._components and component not in self._components:
            return False
        return True

    def log(self, level: DebugLevel, message: str, component: Optional[str] = None) -> None:
        if not self.enabled_for(level, component):
            return
        if component:
            message = f"[{component}] {message}"
        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.TRACE, message, component)

    # Performance tracking

    def start_timer(self, marker_name: str) -> None:
        self._timers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: Optional[str] = None) -> Optional[float]:
        """
        Stop a timer and log the elapsed time.

        Returns:
            Elapsed time in seconds, or None if the timer was never started
        """
        started = self._timers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None
        elapsed = time.perf_counter() - started
        self.debug(f"Performance [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed


# Create a singleton instance
debug = DebugManager()
