"""Tests for the init-secrets command line entry point."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from automotive_dev_operator import init_secrets
from automotive_dev_operator.constants import COOKIE_SECRET_KEY, DEFAULT_NAMESPACE
from automotive_dev_operator.utils.errors import TransientStoreError
from automotive_dev_operator.utils.secrets import KubernetesSecretStore


class TestBuildParser:
    """Test cases for argument parsing."""

    def test_defaults(self):
        """Test default flag values."""
        args = init_secrets.build_parser().parse_args([])
        assert args.namespace == DEFAULT_NAMESPACE
        assert args.namespace == "automotive-dev-operator-system"
        assert args.kubeconfig is None
        assert args.verbose is False

    def test_flags(self):
        """Test flags are parsed."""
        args = init_secrets.build_parser().parse_args(
            ["--namespace", "other", "--kubeconfig", "/tmp/kc", "-v"]
        )
        assert args.namespace == "other"
        assert args.kubeconfig == "/tmp/kc"
        assert args.verbose is True


class TestResolveNamespace:
    """Test cases for resolve_namespace function."""

    def test_flag_used_without_env(self, monkeypatch):
        """Test the flag value is used when POD_NAMESPACE is unset."""
        monkeypatch.delenv("POD_NAMESPACE", raising=False)
        assert init_secrets.resolve_namespace("from-flag") == "from-flag"

    def test_env_overrides_flag(self, monkeypatch):
        """Test POD_NAMESPACE overrides the flag."""
        monkeypatch.setenv("POD_NAMESPACE", "from-env")
        assert init_secrets.resolve_namespace("from-flag") == "from-env"

    def test_empty_env_ignored(self, monkeypatch):
        """Test an empty POD_NAMESPACE does not override the flag."""
        monkeypatch.setenv("POD_NAMESPACE", "")
        assert init_secrets.resolve_namespace("from-flag") == "from-flag"


class TestRun:
    """Test cases for run function."""

    def test_success(self, store):
        """Test a successful pass returns exit code 0."""
        assert init_secrets.run("ns", store) == 0
        assert store.secrets[("ns", "ado-webui-oauth-proxy")].data[COOKIE_SECRET_KEY]
        assert store.secrets[("ns", "ado-build-api-oauth-proxy")].data[COOKIE_SECRET_KEY]

    def test_failure(self, store):
        """Test a failed pass returns exit code 1 and stops early."""
        store.fail("get", "ado-webui-oauth-proxy", TransientStoreError("forbidden", status=403))

        assert init_secrets.run("ns", store) == 1
        assert store.calls == [("get", "ado-webui-oauth-proxy")]


class TestMain:
    """Test cases for main function."""

    def test_main_uses_namespace_and_kubeconfig(self, monkeypatch):
        """Test main wires the CLI flags into the store and run."""
        monkeypatch.delenv("POD_NAMESPACE", raising=False)
        mock_api = Mock()
        with patch.object(init_secrets, "get_core_v1_api", return_value=mock_api) as mock_get_api, \
                patch.object(init_secrets, "run", return_value=0) as mock_run, \
                patch.object(init_secrets.structured_logging, "setup_structured_logging"):
            exit_code = init_secrets.main(["--namespace", "target", "--kubeconfig", "/tmp/kc"])

        assert exit_code == 0
        mock_get_api.assert_called_once_with("/tmp/kc")
        namespace, store = mock_run.call_args[0]
        assert namespace == "target"
        assert isinstance(store, KubernetesSecretStore)
        assert store.api is mock_api

    def test_main_env_namespace(self, monkeypatch):
        """Test POD_NAMESPACE takes precedence in main."""
        monkeypatch.setenv("POD_NAMESPACE", "env-ns")
        with patch.object(init_secrets, "get_core_v1_api", return_value=Mock()), \
                patch.object(init_secrets, "run", return_value=0) as mock_run, \
                patch.object(init_secrets.structured_logging, "setup_structured_logging"):
            init_secrets.main([])

        assert mock_run.call_args[0][0] == "env-ns"

    def test_main_client_failure(self):
        """Test client construction failures exit non-zero."""
        with patch.object(init_secrets, "get_core_v1_api", side_effect=RuntimeError("no config")), \
                patch.object(init_secrets, "run") as mock_run, \
                patch.object(init_secrets.structured_logging, "setup_structured_logging"):
            exit_code = init_secrets.main([])

        assert exit_code == 1
        mock_run.assert_not_called()

    @pytest.mark.parametrize("verbose,expected", [([], None), (["--verbose"], 10)])
    def test_main_log_level(self, verbose, expected):
        """Test --verbose switches to debug logging."""
        with patch.object(init_secrets, "get_core_v1_api", return_value=Mock()), \
                patch.object(init_secrets, "run", return_value=0), \
                patch.object(init_secrets.structured_logging, "setup_structured_logging") as mock_setup:
            init_secrets.main(verbose)

        mock_setup.assert_called_once_with(expected)
