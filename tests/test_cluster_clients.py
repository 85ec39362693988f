"""Tests for the subprocess executor and the kubectl / svcat clients."""

import subprocess
from unittest.mock import patch, MagicMock

import pytest

from svcbind.config import Config
from svcbind.models.binding import ServiceDescriptor
from svcbind.services.cluster import KubectlClient, ServiceCatalogClient
from svcbind.services.executor import ExecutionError, SubprocessExecutor

from conftest import FakeExecutor, failed, ok, secret_json, services_json


def completed(returncode=0, stdout="", stderr=""):
    mock_result = MagicMock()
    mock_result.returncode = returncode
    mock_result.stdout = stdout
    mock_result.stderr = stderr
    return mock_result


class TestSubprocessExecutor:

    def test_run_captures_output(self):
        with patch("subprocess.run", return_value=completed(0, "out", "err")) as mock_run:
            result = SubprocessExecutor().run(["kubectl", "get", "svc"])

        mock_run.assert_called_once()
        assert mock_run.call_args[0][0] == ["kubectl", "get", "svc"]
        assert mock_run.call_args[1]["capture_output"] is True
        assert mock_run.call_args[1]["timeout"] is None
        assert result.exit_code == 0
        assert result.stdout == "out"
        assert result.stderr == "err"
        assert result.ok

    def test_non_zero_exit_is_a_result_not_an_error(self):
        with patch("subprocess.run", return_value=completed(1, "", "boom")):
            result = SubprocessExecutor().run(["svcat", "bind", "mydb"])

        assert not result.ok
        assert result.stderr == "boom"

    def test_missing_binary_raises_execution_error(self):
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(ExecutionError, match="svcat not found"):
                SubprocessExecutor().run(["svcat", "get", "instances"])

    def test_timeout_raises_execution_error(self):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("kubectl", 5)):
            with pytest.raises(ExecutionError, match="timed out"):
                SubprocessExecutor(timeout=5).run(["kubectl", "get", "svc"])

    def test_timeout_is_passed_through(self):
        with patch("subprocess.run", return_value=completed()) as mock_run:
            SubprocessExecutor(timeout=30).run(["kubectl", "version"])

        assert mock_run.call_args[1]["timeout"] == 30


class TestKubectlClient:

    def test_list_services(self, config):
        executor = FakeExecutor({
            ("get", "svc", "-o", "json"): ok(services_json(("redis", "default"), ("api", "web"))),
        })

        result, services = KubectlClient(executor, config).list_services()

        assert result.ok
        assert services == [
            ServiceDescriptor("redis", "default"),
            ServiceDescriptor("api", "web"),
        ]

    def test_namespace_is_added_to_commands(self):
        executor = FakeExecutor()
        client = KubectlClient(executor, Config(namespace="staging"))

        client.list_services()
        client.get_secret("mydb")

        assert executor.calls[0][-2:] == ["-n", "staging"]
        assert executor.calls[1][-2:] == ["-n", "staging"]

    def test_configured_binary_is_used(self):
        executor = FakeExecutor()

        KubectlClient(executor, Config(kubectl_path="/opt/bin/kubectl", namespace=None)).list_services()

        assert executor.calls[0][0] == "/opt/bin/kubectl"

    def test_failed_listing_returns_no_services(self, config):
        executor = FakeExecutor({("get", "svc", "-o", "json"): failed("Unable to connect to the server")})

        result, services = KubectlClient(executor, config).list_services()

        assert not result.ok
        assert services == []

    def test_malformed_json_is_reported_as_failure(self, config):
        executor = FakeExecutor({("get", "svc", "-o", "json"): ok("not json")})

        result, services = KubectlClient(executor, config).list_services()

        assert not result.ok
        assert services == []

    def test_get_secret_returns_document(self, config):
        executor = FakeExecutor({
            ("get", "secret", "mydb", "-o", "json"): ok(secret_json("mydb", ["host", "port"])),
        })

        result, secret = KubectlClient(executor, config).get_secret("mydb")

        assert result.ok
        assert list(secret["data"]) == ["host", "port"]

    def test_execution_error_propagates(self, config):
        executor = FakeExecutor({("get", "secret", "mydb", "-o", "json"): ExecutionError("kubectl not found")})

        with pytest.raises(ExecutionError):
            KubectlClient(executor, config).get_secret("mydb")


class TestServiceCatalogClient:

    def test_get_instances_command(self, config):
        executor = FakeExecutor({("get", "instances"): ok("table")})

        result = ServiceCatalogClient(executor, config).get_instances()

        assert result.stdout == "table"
        assert executor.calls == [["svcat", "get", "instances"]]

    def test_bind_command(self, config):
        executor = FakeExecutor({("bind", "mydb"): ok()})

        ServiceCatalogClient(executor, config).bind("mydb")

        assert executor.calls == [["svcat", "bind", "mydb"]]

    def test_namespace_is_added_to_commands(self):
        executor = FakeExecutor()

        ServiceCatalogClient(executor, Config(namespace="staging")).bind("mydb")

        assert executor.calls == [["svcat", "bind", "mydb", "-n", "staging"]]

