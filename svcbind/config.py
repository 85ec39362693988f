"""Configuration and constants for the service binding tool."""

import os
from dataclasses import dataclass, field


def _optional_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    return int(raw)


@dataclass
class Config:
    """Application configuration settings."""

    # CLI binaries
    kubectl_path: str = field(
        default_factory=lambda: os.environ.get("SVCBIND_KUBECTL", "kubectl")
    )
    svcat_path: str = field(
        default_factory=lambda: os.environ.get("SVCBIND_SVCAT", "svcat")
    )

    # None means the namespace of the current kube context
    namespace: str | None = field(
        default_factory=lambda: os.environ.get("SVCBIND_NAMESPACE") or None
    )

    # Seconds; None waits for the CLI to finish
    command_timeout: int | None = field(
        default_factory=lambda: _optional_int("SVCBIND_COMMAND_TIMEOUT")
    )

    # Chart layout
    values_filename: str = "values.yaml"
    chart_filename: str = "Chart.yaml"

    # In-cluster DNS
    cluster_dns_suffix: str = "svc.cluster.local"

    # stderr text svcat prints when the binding is already there
    binding_exists_marker: str = "already exists"


# Global config instance
config = Config()
