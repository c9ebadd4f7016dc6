"""Configuration module for gpxbind.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

resilient_operation(operation_name: str)
    Decorator for logging failures of boundary operations

Usage:
------
```python
from gpxbind.config import settings
indent = settings.xml.indent

from gpxbind.config import get_logger
logger = get_logger(__name__)
logger.info("Reading document")
```
"""

from .logging import (
    get_logger,
    resilient_operation,
    setup_loguru_logger,
)
from .settings import settings

__all__ = [
    "get_logger",
    "resilient_operation",
    "settings",
    "setup_loguru_logger",
]
