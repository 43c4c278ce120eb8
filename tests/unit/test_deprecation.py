"""
Unit tests for deprecation tracking
===================================

Tests for compressors/deprecation.py including:
- One warning per name per tracker
- Tracker isolation between runs
- Silenced requests
"""

import logging

from base_classes import Settings
from compressors.deprecation import DeprecationTracker, warn_deprecation


def _deprecation_records(caplog):
    return [r for r in caplog.records if "DEPRECATED" in r.getMessage()]


class TestDeprecationTracker:
    """Test DeprecationTracker"""

    def test_warns_once(self, caplog):
        tracker = DeprecationTracker()
        with caplog.at_level(logging.WARNING):
            assert tracker.warn("yui", "use terser")
            assert not tracker.warn("yui", "use terser")

        records = _deprecation_records(caplog)
        assert len(records) == 1
        assert records[0].getMessage() == "[yui] DEPRECATED: use terser"

    def test_trackers_are_independent(self):
        first, second = DeprecationTracker(), DeprecationTracker()
        first.warn("yui", "x")
        assert first.has_warned("yui")
        assert not second.has_warned("yui")
        assert second.warn("yui", "x")

    def test_reset(self):
        tracker = DeprecationTracker()
        tracker.warn("yui", "x")
        tracker.reset()
        assert not tracker.has_warned("yui")


class TestWarnDeprecation:
    """Test warn_deprecation with request settings"""

    def test_uses_settings_tracker(self):
        tracker = DeprecationTracker()
        warn_deprecation(Settings(deprecations=tracker), "yui", "x")
        assert tracker.has_warned("yui")

    def test_silence(self, caplog):
        tracker = DeprecationTracker()
        with caplog.at_level(logging.WARNING):
            warn_deprecation(Settings(deprecations=tracker, silence=True), "yui", "x")
        assert not tracker.has_warned("yui")
        assert _deprecation_records(caplog) == []

    def test_without_tracker_always_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            warn_deprecation(Settings(), "yui", "x")
            warn_deprecation(None, "yui", "x")
        assert len(_deprecation_records(caplog)) == 2
