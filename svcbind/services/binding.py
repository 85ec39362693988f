"""BindingService for binding a chart to in-cluster and catalog services.

This module provides the flows that turn a discovery result into an entry
in the chart's values file:

- add_service: bind a Kubernetes Service by its in-cluster DNS name
- add_external_service: bind a service-catalog instance through svcat and
  record the key names of the secret it produces
- remove_binding: drop an entry from either section

Failures of the external CLIs are reported through the host and end the
flow with a FAILED outcome. A cancelled prompt or an already-recorded
binding ends the flow without a notice.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from svcbind.config import Config, config as default_config
from svcbind.models.binding import (
    BindingKind,
    ServiceCatalogBinding,
    ServiceEnvBinding,
    ValuesDocument,
)
from svcbind.services.cluster import KubectlClient, ServiceCatalogClient
from svcbind.services.executor import ExecutionError
from svcbind.services.host import ClipboardError, ClipboardInterface, HostInterface
from svcbind.services.instances import InstanceCache
from svcbind.services.usage import UsageHintService
from svcbind.services.values import ValuesService


logger = logging.getLogger(__name__)


class OutcomeStatus(Enum):
    """How a binding flow ended."""
    ADDED = "added"
    REMOVED = "removed"
    DUPLICATE = "duplicate"
    CANCELLED = "cancelled"
    EMPTY = "empty"
    NOT_PRESENT = "not_present"
    FAILED = "failed"


@dataclass
class BindingOutcome:
    """Result of a binding flow.

    Attributes:
        status: How the flow ended
        binding_name: Binding the flow worked on, when one was selected
        message: Notice shown to the user, if any
    """
    status: OutcomeStatus
    binding_name: str | None = None
    message: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == OutcomeStatus.FAILED


class BindingService:
    """Orchestrates discovery, selection and persistence of bindings."""

    def __init__(
        self,
        kubectl: KubectlClient,
        catalog: ServiceCatalogClient,
        values: ValuesService,
        host: HostInterface,
        clipboard: ClipboardInterface,
        usage: Optional[UsageHintService] = None,
        cache: Optional[InstanceCache] = None,
        config: Optional[Config] = None,
    ):
        self.kubectl = kubectl
        self.catalog = catalog
        self.values = values
        self.host = host
        self.clipboard = clipboard
        self.usage = usage or UsageHintService()
        self.cache = cache if cache is not None else InstanceCache()
        self.config = config or default_config

    def _fail(self, message: str, binding_name: str | None = None) -> BindingOutcome:
        self.host.error(message)
        return BindingOutcome(OutcomeStatus.FAILED, binding_name, message)

    def _empty(self, message: str) -> BindingOutcome:
        self.host.info(message)
        return BindingOutcome(OutcomeStatus.EMPTY, message=message)

    # ------------------------------------------------------------------
    # In-cluster services
    # ------------------------------------------------------------------

    def add_service(self, document: ValuesDocument) -> BindingOutcome:
        """Bind a Kubernetes Service in the current namespace.

        Records `{name, value: <dns name>}` under serviceEnv and copies a
        usage hint to the clipboard.
        """
        try:
            result, services = self.kubectl.list_services()
        except ExecutionError as e:
            logger.warning("Listing services failed: %s", e)
            return self._fail(f"Could not list services: {e}")

        if not result.ok:
            logger.warning("kubectl get svc exited with %d: %s", result.exit_code, result.stderr)
            detail = result.stderr.strip() or f"exit code {result.exit_code}"
            return self._fail(f"Could not list services: {detail}")

        if not services:
            return self._empty("No services found in current namespace")

        selected = self.host.choose(
            [service.name for service in services],
            "Select a Kubernetes service to bind",
        )
        if not selected:
            return BindingOutcome(OutcomeStatus.CANCELLED)

        service = next((s for s in services if s.name == selected), None)
        if service is None:
            return BindingOutcome(OutcomeStatus.CANCELLED)

        if self.values.is_binding_present(BindingKind.SERVICE_ENV, service.name, document.content):
            logger.info("Service %s is already bound", service.name)
            return BindingOutcome(OutcomeStatus.DUPLICATE, service.name)

        dns_name = service.dns_name(self.config.cluster_dns_suffix)
        self.values.write(ServiceEnvBinding(name=service.name, value=dns_name), document)
        try:
            self.usage.write_service_hint(service.name, self.clipboard)
        except ClipboardError as e:
            self.host.error(f"Bound service {service.name}, but {e}")
            return BindingOutcome(OutcomeStatus.ADDED, service.name, str(e))

        message = "Wrote service info to your clipboard"
        self.host.info(message)
        return BindingOutcome(OutcomeStatus.ADDED, service.name, message)

    # ------------------------------------------------------------------
    # Service-catalog instances
    # ------------------------------------------------------------------

    def discover_instances(self) -> Optional[str]:
        """Run `svcat get instances`, returning its table or None on failure."""
        try:
            result = self.catalog.get_instances()
        except ExecutionError as e:
            logger.warning("svcat get instances failed: %s", e)
            self.host.error("Error retrieving Service Instances")
            return None

        if not result.ok:
            logger.warning("svcat get instances exited with %d: %s", result.exit_code, result.stderr)
            self.host.error("Error retrieving Service Instances")
            return None
        return result.stdout

    def create_or_get_binding(self, instance_name: str) -> Optional[str]:
        """Create a service-catalog binding, reusing one that already exists.

        Returns:
            The binding name (same as the instance name), or None if the
            binding could neither be created nor reused
        """
        try:
            result = self.catalog.bind(instance_name)
        except ExecutionError as e:
            logger.warning("svcat bind %s failed: %s", instance_name, e)
            self.host.error(f'Error binding to External Service "{instance_name}"')
            return None

        if result.ok:
            return instance_name

        if self.config.binding_exists_marker in result.stderr:
            logger.warning("Reusing existing binding %s", instance_name)
            return instance_name

        logger.warning("svcat bind %s exited with %d: %s", instance_name, result.exit_code, result.stderr)
        self.host.error(f'Could not bind to External Service "{instance_name}"')
        return None

    def get_secret_keys(self, secret_name: str) -> Optional[list[str]]:
        """Key names of the secret svcat created for a binding."""
        try:
            result, secret = self.kubectl.get_secret(secret_name)
        except ExecutionError as e:
            logger.warning("kubectl get secret %s failed: %s", secret_name, e)
            self.host.error(f"Could not find the External Service secret {secret_name} on the cluster")
            return None

        if not result.ok or secret is None:
            logger.warning("kubectl get secret %s exited with %d: %s", secret_name, result.exit_code, result.stderr)
            self.host.error(f"Could not get External Service {secret_name} on the cluster")
            return None

        return list((secret.get("data") or {}).keys())

    def add_external_service(self, document: ValuesDocument) -> BindingOutcome:
        """Bind a service-catalog instance to the chart.

        Records `{name: <binding>, vars: [<secret keys>]}` under
        serviceCatalogEnv. The secret values themselves never reach the
        values file. If the secret lookup fails the svcat binding stays in
        place.
        """
        if self.cache.get(self.discover_instances) is None:
            return BindingOutcome(OutcomeStatus.FAILED, message="Error retrieving Service Instances")

        if self.cache.is_empty():
            return self._empty("No service instances found")

        selected = self.host.choose(
            list(self.cache.names),
            "Pick an External Service to add to the selected application",
        )
        if not selected:
            return BindingOutcome(OutcomeStatus.CANCELLED)

        record = self.cache.get_record(selected)
        if record is not None:
            logger.info(
                "Binding instance %s (class %s, plan %s, status %s)",
                record.name, record.class_name, record.plan, record.status,
            )

        binding = self.create_or_get_binding(selected)
        if binding is None:
            return BindingOutcome(OutcomeStatus.FAILED, selected)

        if self.values.is_binding_present(BindingKind.SERVICE_CATALOG_ENV, binding, document.content):
            logger.info("External service %s is already bound", binding)
            return BindingOutcome(OutcomeStatus.DUPLICATE, binding)

        keys = self.get_secret_keys(binding)
        if keys is None:
            return BindingOutcome(OutcomeStatus.FAILED, binding)

        self.values.write(ServiceCatalogBinding(name=binding, vars=tuple(keys)), document)
        try:
            self.usage.write_catalog_hint(binding, keys, self.clipboard, self.host)
        except ClipboardError as e:
            self.host.error(str(e))

        message = f'Bound the application to External Service "{selected}"'
        self.host.info(message)
        return BindingOutcome(OutcomeStatus.ADDED, binding, message)

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove_binding(self, kind: BindingKind, document: ValuesDocument) -> BindingOutcome:
        """Remove a binding entry from the values file.

        Only the values file changes; a service-catalog binding is left on
        the cluster since other applications may consume it.
        """
        names = document.binding_names(kind)
        if not names:
            return self._empty("No Services to remove.")

        selected = self.host.choose(names, "Select a Service to remove")
        if not selected:
            return BindingOutcome(OutcomeStatus.CANCELLED)

        if not self.values.remove(kind, selected, document):
            return BindingOutcome(OutcomeStatus.NOT_PRESENT, selected)
        return BindingOutcome(OutcomeStatus.REMOVED, selected)
