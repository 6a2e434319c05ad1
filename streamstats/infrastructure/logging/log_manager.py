# streamstats/infrastructure/logging/log_manager.py
import copy
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional, Union


DEFAULT_LOGGING_CONFIG = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'date_format': '%Y-%m-%d %H:%M:%S',
    'console': True,
    'console_level': 'INFO',
    'file': {
        'enabled': False,
        'path': 'logs/streamstats.log',
        'level': 'DEBUG',
        'max_bytes': 10 * 1024 * 1024,
        'backup_count': 5
    },
    'loggers': {
        'domain.stats': {'level': 'INFO'},
        'application.reduction': {'level': 'INFO'},
        'infrastructure.concurrency': {'level': 'WARNING'}
    }
}


def merge_logging_config(overrides: Optional[Dict[str, Any]],
                         base: Dict[str, Any] = DEFAULT_LOGGING_CONFIG) -> Dict[str, Any]:
    """
    Lay a (possibly partial) logging section over a base configuration.

    Top-level keys replace the base; the 'file' block and the 'loggers' table
    are merged one level deeper, so a job may set just `file: {enabled: true}`
    or a single logger level.
    """
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if key in ('file', 'loggers') and isinstance(value, dict):
            merged.setdefault(key, {}).update(copy.deepcopy(value))
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class LogManager:
    """
    Installs the handlers and logger levels of a reduction job on the root logger.

    Only handlers this manager installed are ever removed, so logging set up
    by a host application survives `initialize(..., force=True)` and `shutdown()`.
    """
    def __init__(self):
        self.root_logger = logging.getLogger()
        self.handlers: Dict[str, logging.Handler] = {}
        self.initialized = False

    def initialize(self, config: Dict[str, Any], force: bool = False):
        """
        Configure logging from a LogManager-format dictionary.

        Args:
            config: Complete logging configuration (see DEFAULT_LOGGING_CONFIG)
            force: Replace an earlier configuration instead of keeping it
        """
        if self.initialized and not force:
            return
        self._remove_handlers()

        level = self._get_log_level(config.get('level', 'INFO'))
        self.root_logger.setLevel(level)
        formatter = logging.Formatter(
            config.get('format', DEFAULT_LOGGING_CONFIG['format']),
            config.get('date_format', DEFAULT_LOGGING_CONFIG['date_format'])
        )

        if config.get('console', True):
            self._install('console', self._console_handler(config, level), formatter)

        file_config = config.get('file') or {}
        if file_config.get('enabled', False):
            self._install('file', self._file_handler(file_config, level), formatter)

        self._apply_logger_levels(config.get('loggers') or {}, level)

        self.root_logger.debug(f"Logging initialized with handlers: {sorted(self.handlers)}")
        self.initialized = True

    def shutdown(self):
        """Remove and close every handler installed by this manager."""
        self._remove_handlers()
        self.initialized = False

    def _console_handler(self, config: Dict[str, Any], default_level: int) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self._get_log_level(config.get('console_level', default_level)))
        return handler

    def _file_handler(self, file_config: Dict[str, Any], default_level: int) -> logging.Handler:
        path = file_config.get('path', DEFAULT_LOGGING_CONFIG['file']['path'])
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        handler = RotatingFileHandler(
            path,
            maxBytes=file_config.get('max_bytes', DEFAULT_LOGGING_CONFIG['file']['max_bytes']),
            backupCount=file_config.get('backup_count', DEFAULT_LOGGING_CONFIG['file']['backup_count'])
        )
        handler.setLevel(self._get_log_level(file_config.get('level', default_level)))
        return handler

    def _install(self, name: str, handler: logging.Handler, formatter: logging.Formatter):
        handler.setFormatter(formatter)
        self.root_logger.addHandler(handler)
        self.handlers[name] = handler

    def _remove_handlers(self):
        for handler in self.handlers.values():
            self.root_logger.removeHandler(handler)
            handler.close()
        self.handlers = {}

    def _apply_logger_levels(self, loggers: Dict[str, Any], default_level: int):
        # Shallow names first, so "domain.stats.factory" overrides "domain.stats"
        for name in sorted(loggers, key=lambda n: n.count('.')):
            settings = loggers[name] or {}
            logger = logging.getLogger(name)
            logger.setLevel(self._get_log_level(settings.get('level', default_level)))
            logger.propagate = settings.get('propagate', True)

    def _get_log_level(self, level: Union[str, int]) -> int:
        """Numeric level for a level name or number; unknown names map to INFO."""
        if isinstance(level, int):
            return level
        value = logging.getLevelName(str(level).upper())
        return value if isinstance(value, int) else logging.INFO


# Singleton instance
log_manager = LogManager()


def initialize_logging(config: Optional[Dict[str, Any]] = None, force: bool = False) -> LogManager:
    """
    Initialize logging from a job's 'logging' section.

    Args:
        config: Optional, possibly partial, logging section; missing keys take
            their values from DEFAULT_LOGGING_CONFIG
        force: Reconfigure even if logging was already initialized

    Returns:
        The shared LogManager
    """
    log_manager.initialize(merge_logging_config(config), force=force)
    return log_manager
