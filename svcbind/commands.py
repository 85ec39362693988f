"""Command entry points for adding and removing service bindings.

Each command locates the chart, loads its values file and runs one binding
flow. Any failure that escapes a flow is shown to the user here; nothing
propagates past a command.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from svcbind.config import Config, config as default_config
from svcbind.models.binding import BindingKind, ValuesDocument
from svcbind.services.binding import BindingOutcome, BindingService, OutcomeStatus
from svcbind.services.charts import ChartLocator, ChartNotFoundError
from svcbind.services.cluster import KubectlClient, ServiceCatalogClient
from svcbind.services.executor import ExecutionError, SubprocessExecutor
from svcbind.services.host import (
    ClipboardError,
    ClipboardInterface,
    ConsoleHost,
    HostInterface,
    SystemClipboard,
)
from svcbind.services.values import ValuesError, ValuesService


logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """Collaborators shared by the commands of one process run.

    Attributes:
        binding: Binding flows, owning the instance cache
        locator: Chart locator used to find the values file
        host: Prompt and notice surface
        chart: Chart directory given on the command line, if any
    """
    binding: BindingService
    locator: ChartLocator
    host: HostInterface
    chart: Optional[Path] = None


def build_context(
    config: Optional[Config] = None,
    chart: Path | str | None = None,
    root: Path | str = ".",
    host: Optional[HostInterface] = None,
    clipboard: Optional[ClipboardInterface] = None,
) -> CommandContext:
    """Wire the default subprocess, terminal and clipboard collaborators."""
    config = config or default_config
    host = host or ConsoleHost()
    executor = SubprocessExecutor(timeout=config.command_timeout)

    binding = BindingService(
        kubectl=KubectlClient(executor, config),
        catalog=ServiceCatalogClient(executor, config),
        values=ValuesService(config),
        host=host,
        clipboard=clipboard or SystemClipboard(),
        config=config,
    )
    return CommandContext(
        binding=binding,
        locator=ChartLocator(host, root, config),
        host=host,
        chart=Path(chart) if chart is not None else None,
    )


def _run(
    ctx: CommandContext, flow: Callable[[ValuesDocument], BindingOutcome]
) -> BindingOutcome:
    try:
        chart_dir = ctx.locator.pick(ctx.chart)
    except ChartNotFoundError as e:
        ctx.host.error(str(e))
        return BindingOutcome(OutcomeStatus.FAILED, message=str(e))
    if chart_dir is None:
        return BindingOutcome(OutcomeStatus.CANCELLED)

    try:
        document = ctx.binding.values.load(chart_dir)
        return flow(document)
    except (ValuesError, ExecutionError, ClipboardError, OSError) as e:
        logger.error("Command failed: %s", e)
        ctx.host.error(str(e))
        return BindingOutcome(OutcomeStatus.FAILED, message=str(e))


def add_service(ctx: CommandContext) -> BindingOutcome:
    """Bind a Kubernetes Service to the chart."""
    return _run(ctx, ctx.binding.add_service)


def remove_service(ctx: CommandContext) -> BindingOutcome:
    """Remove a Kubernetes Service binding from the values file."""
    return _run(ctx, lambda document: ctx.binding.remove_binding(BindingKind.SERVICE_ENV, document))


def add_external_service(ctx: CommandContext) -> BindingOutcome:
    """Bind a service-catalog instance to the chart."""
    return _run(ctx, ctx.binding.add_external_service)


def remove_external_service(ctx: CommandContext) -> BindingOutcome:
    """Remove a service-catalog binding from the values file.

    The binding itself stays on the cluster; other applications may use it.
    """
    return _run(
        ctx, lambda document: ctx.binding.remove_binding(BindingKind.SERVICE_CATALOG_ENV, document)
    )


COMMANDS: dict[str, Callable[[CommandContext], BindingOutcome]] = {
    "add-service": add_service,
    "remove-service": remove_service,
    "add-external-service": add_external_service,
    "remove-external-service": remove_external_service,
}
