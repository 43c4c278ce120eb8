"""
Deprecation warnings for compressors that are no longer maintained upstream.
"""

import logging
from typing import Optional, Set

from base_classes import Settings

logger = logging.getLogger(__name__)


class DeprecationTracker:
    """
    Emits each compressor's deprecation warning at most once.

    One tracker is owned by a top-level run and travels to the adapters on
    ``Settings.deprecations``; separate runs (and separate tests) get separate
    trackers.
    """

    def __init__(self):
        self._warned: Set[str] = set()

    def warn(self, name: str, message: str) -> bool:
        """Log the warning unless already done; returns True when logged"""
        if name in self._warned:
            return False
        self._warned.add(name)
        logger.warning(f"[{name}] DEPRECATED: {message}")
        return True

    def has_warned(self, name: str) -> bool:
        return name in self._warned

    def reset(self):
        self._warned.clear()


def warn_deprecation(settings: Optional[Settings], name: str, message: str) -> None:
    """Report through the run's tracker; no tracker means a one-off warning"""
    tracker = settings.deprecations if settings is not None else None
    if tracker is None:
        tracker = DeprecationTracker()
    if not (settings is not None and settings.silence):
        tracker.warn(name, message)
