"""
STEM Tutor - Logging Setup
Configures the standard library root logger once per process
"""
import logging

from stem_tutor.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure root logging. Safe to call more than once."""
    global _configured
    if _configured:
        return
    
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format=LOG_FORMAT,
    )
    _configured = True
