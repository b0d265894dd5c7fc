"""Tests for correlation-aware logging."""

import logging

import pytest

from vtree_snapshot.shared.logging import CorrelationLogger, describe, get_logger


class Unprintable:
    def __repr__(self) -> str:
        raise RuntimeError("no repr")


class TestDescribe:
    """Test bounded context descriptions."""

    def test_short_values(self) -> None:
        """Test small values are rendered in full."""
        assert describe("abc") == "'abc'"
        assert describe([1, 2]) == "[1, 2]"

    def test_long_values_are_bounded(self) -> None:
        """Test large values are truncated."""
        assert len(describe("x" * 1000)) < 200
        assert "..." in describe(list(range(100)))

    def test_broken_repr(self) -> None:
        """Test values whose repr raises are still described."""
        assert "Unprintable" in describe(Unprintable())


class TestCorrelationLogger:
    """Test correlation logger records."""

    def test_default_component(self) -> None:
        """Test component defaults to the last name segment."""
        logger = CorrelationLogger("vtree_snapshot.tree.walker")

        assert logger.component == "walker"

    def test_records_carry_correlation(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test component and correlation ID are attached to records."""
        caplog.set_level(logging.INFO, logger="vtree_snapshot.test")
        logger = get_logger("vtree_snapshot.test", "abc123", "unit")

        logger.info("hello", extra={"node_name": "Card"})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "abc123"
        assert record.node_name == "Card"

    def test_warn_attaches_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test warn summarizes the offending value."""
        caplog.set_level(logging.WARNING, logger="vtree_snapshot.test")
        logger = get_logger("vtree_snapshot.test", component="unit")

        logger.warn("bad shape", ["<Card>", "<Label>"])

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.node_context == "['<Card>', '<Label>']"

    def test_warn_with_broken_context(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test warn does not raise on unprintable context."""
        caplog.set_level(logging.WARNING, logger="vtree_snapshot.test")

        get_logger("vtree_snapshot.test").warn("odd value", Unprintable())

        assert "Unprintable" in caplog.records[-1].node_context

    def test_exception_includes_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test exception logging attaches exc_info."""
        caplog.set_level(logging.ERROR, logger="vtree_snapshot.test")
        logger = get_logger("vtree_snapshot.test")

        try:
            raise ValueError("boom")
        except ValueError:
            logger.exception("failed")

        assert caplog.records[-1].exc_info is not None

