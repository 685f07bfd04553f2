"""Tests for Kubernetes event utilities."""

from __future__ import annotations

from unittest.mock import patch

from automotive_dev_operator.utils.events import (
    emit_event,
    emit_oauth_secrets_failed,
    emit_oauth_secrets_ready,
    emit_reconcile_failed,
    emit_reconcile_started,
    emit_validate_failed,
    emit_validate_succeeded,
)


class TestEmitEvent:
    """Test cases for emit_event function."""

    @patch("automotive_dev_operator.utils.events.kopf.event")
    def test_emit_event_normal(self, mock_event):
        """Test emitting normal event."""
        body = {"metadata": {"name": "config", "namespace": "default"}}

        emit_event(body, "TestReason", "Test message")

        mock_event.assert_called_once_with(
            body,
            reason="TestReason",
            message="Test message",
            type="Normal",
        )

    @patch("automotive_dev_operator.utils.events.kopf.event")
    def test_emit_event_warning(self, mock_event):
        """Test emitting warning event."""
        body = {"metadata": {"name": "config"}}

        emit_event(body, "ErrorReason", "Error occurred", type_="Warning")

        assert mock_event.call_args.kwargs["type"] == "Warning"


class TestSpecificEvents:
    """Test cases for the named event helpers."""

    @patch("automotive_dev_operator.utils.events.kopf.event")
    def test_lifecycle_events(self, mock_event):
        """Test reconcile and validation events use the right reasons and types."""
        body = {}
        emit_reconcile_started(body)
        emit_reconcile_failed(body, "boom")
        emit_validate_succeeded(body)
        emit_validate_failed(body, "bad spec")

        calls = [(c.kwargs["reason"], c.kwargs["type"]) for c in mock_event.call_args_list]
        assert calls == [
            ("ReconcileStarted", "Normal"),
            ("ReconcileFailed", "Warning"),
            ("ValidateSucceeded", "Normal"),
            ("ValidateFailed", "Warning"),
        ]

    @patch("automotive_dev_operator.utils.events.kopf.event")
    def test_oauth_secret_events(self, mock_event):
        """Test OAuth secret events."""
        body = {}
        emit_oauth_secrets_ready(body, "operator-ns")
        emit_oauth_secrets_failed(body, "failed to get secret foo")

        ready, failed = mock_event.call_args_list
        assert ready.kwargs["reason"] == "OAuthSecretsReady"
        assert "operator-ns" in ready.kwargs["message"]
        assert failed.kwargs["reason"] == "OAuthSecretsFailed"
        assert failed.kwargs["type"] == "Warning"
