"""Tests for base handler functionality."""

from __future__ import annotations

import json
import logging

import kopf
import pytest

from automotive_dev_operator.handlers.base import BaseHandler


@pytest.fixture
def meta():
    return {"name": "config", "namespace": "default", "uid": "uid-1", "generation": 2}


class TestBaseHandler:
    """Test cases for BaseHandler class."""

    def test_init(self):
        """Test handler initialization."""
        handler = BaseHandler(kind="TestKind")
        assert handler.kind == "TestKind"
        assert handler.logger is not None

    def test_update_resource_status(self, meta):
        """Test status carries phase, message, timestamp and generation."""
        handler = BaseHandler(kind="TestKind")
        patch = kopf.Patch()

        handler.update_resource_status(patch, meta, "Ready", "all good", {"extra": 1})

        assert patch.status["phase"] == "Ready"
        assert patch.status["message"] == "all good"
        assert patch.status["observedGeneration"] == 2
        assert patch.status["extra"] == 1
        assert patch.status["lastUpdated"]

    def test_log_error_sanitizes(self, meta, caplog):
        """Test errors are sanitized before logging."""
        handler = BaseHandler(kind="TestKind")
        with caplog.at_level(logging.ERROR, logger=handler.logger.name):
            handler.log_error(meta, "failed", error=ValueError("password: hunter2"))

        record = json.loads(caplog.records[-1].getMessage())
        assert record["resource"] == "TestKind"
        assert record["uid"] == "uid-1"
        assert record["error_type"] == "ValueError"
        assert "hunter2" not in record["error"]


class TestReconcileWithMetrics:
    """Test cases for reconcile_with_metrics."""

    def test_success(self, meta, mock_kopf_event):
        """Test the reconcile function runs and a start event is emitted."""
        handler = BaseHandler(kind="TestKind")
        calls = []

        handler.reconcile_with_metrics(meta, meta, lambda: calls.append(1))

        assert calls == [1]
        assert mock_kopf_event.call_args_list[0].kwargs["reason"] == "ReconcileStarted"

    def test_failure_reraises(self, meta, mock_kopf_event):
        """Test failures are re-raised after a warning event."""
        handler = BaseHandler(kind="TestKind")

        def fail():
            raise kopf.TemporaryError("not yet")

        with pytest.raises(kopf.TemporaryError):
            handler.reconcile_with_metrics(meta, meta, fail)

        reasons = [c.kwargs["reason"] for c in mock_kopf_event.call_args_list]
        assert reasons == ["ReconcileStarted", "ReconcileFailed"]
