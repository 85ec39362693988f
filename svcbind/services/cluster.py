"""Clients for kubectl and the service-catalog CLI (svcat).

Both clients build argument lists and hand them to a process executor;
they never interpret failures beyond decoding JSON output, leaving the
decision of what to tell the user to the binding flows.
"""

import json
import logging
from typing import Any, Optional

from svcbind.config import Config, config as default_config
from svcbind.models.binding import ServiceDescriptor
from svcbind.services.executor import ExecResult, ProcessExecutorInterface


logger = logging.getLogger(__name__)


def _decode_json(result: ExecResult) -> tuple[ExecResult, Optional[dict[str, Any]]]:
    """Decode a successful JSON result.

    Malformed output is reported as a failed result so callers only have
    to check the exit code.
    """
    if not result.ok:
        return result, None
    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        logger.warning("Could not decode kubectl output: %s", e)
        return ExecResult(exit_code=1, stdout=result.stdout, stderr=str(e)), None
    if not isinstance(data, dict):
        return ExecResult(exit_code=1, stdout=result.stdout, stderr="Unexpected JSON document"), None
    return result, data


class KubectlClient:
    """Runs kubectl queries needed by the binding flows."""

    def __init__(self, executor: ProcessExecutorInterface, config: Optional[Config] = None):
        self.executor = executor
        self.config = config or default_config

    def _command(self, *args: str) -> list[str]:
        command = [self.config.kubectl_path, *args]
        if self.config.namespace:
            command.extend(["-n", self.config.namespace])
        return command

    def list_services(self) -> tuple[ExecResult, list[ServiceDescriptor]]:
        """List Services in the target namespace.

        Returns:
            The raw result and the services it describes (empty on failure).

        Raises:
            ExecutionError: If kubectl could not be run
        """
        result, data = _decode_json(self.executor.run(self._command("get", "svc", "-o", "json")))
        if data is None:
            return result, []

        services = []
        for item in data.get("items") or []:
            metadata = item.get("metadata") or {}
            services.append(
                ServiceDescriptor(
                    name=metadata.get("name", ""),
                    namespace=metadata.get("namespace", "default"),
                )
            )
        return result, services

    def get_secret(self, name: str) -> tuple[ExecResult, Optional[dict[str, Any]]]:
        """Fetch a Secret as a parsed JSON document.

        Raises:
            ExecutionError: If kubectl could not be run
        """
        return _decode_json(self.executor.run(self._command("get", "secret", name, "-o", "json")))


class ServiceCatalogClient:
    """Runs svcat commands."""

    def __init__(self, executor: ProcessExecutorInterface, config: Optional[Config] = None):
        self.executor = executor
        self.config = config or default_config

    def _command(self, *args: str) -> list[str]:
        command = [self.config.svcat_path, *args]
        if self.config.namespace:
            command.extend(["-n", self.config.namespace])
        return command

    def get_instances(self) -> ExecResult:
        """Run `svcat get instances`; stdout is the tabular listing."""
        return self.executor.run(self._command("get", "instances"))

    def bind(self, instance_name: str) -> ExecResult:
        """Run `svcat bind NAME`, creating a binding named after the instance."""
        return self.executor.run(self._command("bind", instance_name))
