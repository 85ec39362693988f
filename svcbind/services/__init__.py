# Core Services
from svcbind.services.binding import BindingOutcome, BindingService, OutcomeStatus
from svcbind.services.charts import ChartLocator, ChartNotFoundError
from svcbind.services.cluster import KubectlClient, ServiceCatalogClient
from svcbind.services.executor import (
    ExecResult,
    ExecutionError,
    ProcessExecutorInterface,
    SubprocessExecutor,
)
from svcbind.services.host import (
    ClipboardError,
    ClipboardInterface,
    ConsoleHost,
    HostInterface,
    SystemClipboard,
)
from svcbind.services.instances import InstanceCache, parse_instance_table
from svcbind.services.usage import UsageHintService
from svcbind.services.values import (
    ValuesError,
    ValuesNotFoundError,
    ValuesParseError,
    ValuesService,
)

__all__ = [
    "BindingOutcome",
    "BindingService",
    "OutcomeStatus",
    "ChartLocator",
    "ChartNotFoundError",
    "KubectlClient",
    "ServiceCatalogClient",
    "ExecResult",
    "ExecutionError",
    "ProcessExecutorInterface",
    "SubprocessExecutor",
    "ClipboardError",
    "ClipboardInterface",
    "ConsoleHost",
    "HostInterface",
    "SystemClipboard",
    "InstanceCache",
    "parse_instance_table",
    "UsageHintService",
    "ValuesError",
    "ValuesNotFoundError",
    "ValuesParseError",
    "ValuesService",
]
