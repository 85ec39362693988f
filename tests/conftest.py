"""Shared fakes and fixtures for the binding tests."""

import json
from pathlib import Path
from typing import Optional, Sequence

import pytest
import yaml

from svcbind.config import Config
from svcbind.services.binding import BindingService
from svcbind.services.cluster import KubectlClient, ServiceCatalogClient
from svcbind.services.executor import ExecResult, ExecutionError, ProcessExecutorInterface
from svcbind.services.host import ClipboardInterface, HostInterface
from svcbind.services.values import ValuesService


INSTANCE_TABLE = (
    "  NAME        NAMESPACE   CLASS          PLAN      STATUS\n"
    "+----------+-----------+-------------+---------+--------+\n"
    "  mydb        default     mysqldb        free      Ready\n"
    "  cache       default     redis          basic     Ready\n"
    "\n"
)


class FakeExecutor(ProcessExecutorInterface):
    """Executor returning canned results keyed by the command's arguments.

    The binary name is dropped from the key, so ("get", "svc", "-o", "json")
    matches `kubectl get svc -o json`. An ExecutionError value is raised.
    """

    def __init__(self, responses: Optional[dict] = None):
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []

    def run(self, args: Sequence[str]) -> ExecResult:
        command = list(args)
        self.calls.append(command)
        response = self.responses.get(tuple(command[1:]))
        if response is None:
            return ExecResult(exit_code=1, stdout="", stderr=f"unexpected command {command}")
        if isinstance(response, ExecutionError):
            raise response
        return response

    def count(self, *args: str) -> int:
        return sum(1 for call in self.calls if tuple(call[1:]) == args)


class FakeHost(HostInterface):
    """Host answering prompts from a queue and recording notices."""

    def __init__(self, choices: Optional[list] = None):
        self.choices = list(choices or [])
        self.prompts: list[tuple[list[str], str]] = []
        self.infos: list[str] = []
        self.errors: list[str] = []

    def choose(self, options, placeholder):
        self.prompts.append((list(options), placeholder))
        if not self.choices:
            return None
        return self.choices.pop(0)

    def info(self, text):
        self.infos.append(text)

    def error(self, text):
        self.errors.append(text)


class FakeClipboard(ClipboardInterface):
    def __init__(self):
        self.writes: list[str] = []

    def write(self, text):
        self.writes.append(text)


def ok(stdout: str = "") -> ExecResult:
    return ExecResult(exit_code=0, stdout=stdout, stderr="")


def failed(stderr: str = "error", exit_code: int = 1) -> ExecResult:
    return ExecResult(exit_code=exit_code, stdout="", stderr=stderr)


def services_json(*services: tuple[str, str]) -> str:
    return json.dumps({
        "kind": "List",
        "items": [
            {"metadata": {"name": name, "namespace": namespace}}
            for name, namespace in services
        ],
    })


def secret_json(name: str, keys: Sequence[str]) -> str:
    return json.dumps({
        "kind": "Secret",
        "metadata": {"name": name},
        "data": {key: "c2VjcmV0" for key in keys},
    })


@pytest.fixture
def config() -> Config:
    return Config(
        kubectl_path="kubectl",
        svcat_path="svcat",
        namespace=None,
        command_timeout=None,
    )


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def values_service(config) -> ValuesService:
    return ValuesService(config)


@pytest.fixture
def binding_service(executor, host, clipboard, values_service, config) -> BindingService:
    return BindingService(
        kubectl=KubectlClient(executor, config),
        catalog=ServiceCatalogClient(executor, config),
        values=values_service,
        host=host,
        clipboard=clipboard,
        config=config,
    )


@pytest.fixture
def chart_dir(tmp_path: Path) -> Path:
    """A chart with a minimal values.yaml."""
    chart = tmp_path / "mychart"
    chart.mkdir()
    (chart / "Chart.yaml").write_text("apiVersion: v2\nname: mychart\nversion: 0.1.0\n")
    (chart / "values.yaml").write_text(
        yaml.safe_dump({"replicaCount": 1, "image": {"repository": "nginx"}}, sort_keys=False)
    )
    return chart


def read_values(chart: Path) -> dict:
    return yaml.safe_load((chart / "values.yaml").read_text())
