"""Binding data models.

This module provides dataclasses for discovered services, service-catalog
instances, the two binding entry shapes stored in a chart's values file,
and the loaded values document itself.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union


class BindingKind(Enum):
    """Binding kinds; the value is the values.yaml section name."""
    SERVICE_ENV = "serviceEnv"
    SERVICE_CATALOG_ENV = "serviceCatalogEnv"


@dataclass(frozen=True)
class ServiceDescriptor:
    """An in-cluster Kubernetes Service found by discovery."""
    name: str
    namespace: str

    def dns_name(self, suffix: str = "svc.cluster.local") -> str:
        """Fully-qualified in-cluster DNS name of the service."""
        return f"{self.name}.{self.namespace}.{suffix}"


@dataclass(frozen=True)
class ServiceInstanceRecord:
    """One row of `svcat get instances` output.

    Attributes:
        name: Instance name, unique within the cache
        namespace: Namespace the instance lives in
        class_name: Service class the instance was provisioned from
        plan: Service plan
        status: Provisioning status as printed by svcat

    Short rows leave trailing fields as None.
    """
    name: str
    namespace: Optional[str] = None
    class_name: Optional[str] = None
    plan: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class ServiceEnvBinding:
    """A binding to an in-cluster service: name -> DNS hostname."""
    name: str
    value: str

    @property
    def kind(self) -> BindingKind:
        return BindingKind.SERVICE_ENV

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class ServiceCatalogBinding:
    """A binding to a service-catalog instance: name -> secret key names."""
    name: str
    vars: tuple[str, ...] = ()

    @property
    def kind(self) -> BindingKind:
        return BindingKind.SERVICE_CATALOG_ENV

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "vars": list(self.vars)}


BindingEntry = Union[ServiceEnvBinding, ServiceCatalogBinding]


@dataclass
class ValuesDocument:
    """A chart's values file, loaded into memory.

    Attributes:
        path: Location of the values file on disk
        content: Parsed YAML mapping; mutated in place before saving
    """
    path: Path
    content: dict[str, Any] = field(default_factory=dict)

    def section(self, kind: BindingKind) -> list[dict[str, Any]]:
        """Entries of a binding section; an absent or non-list section reads as empty."""
        section = self.content.get(kind.value)
        return section if isinstance(section, list) else []

    def binding_names(self, kind: BindingKind) -> list[str]:
        return [
            entry["name"] for entry in self.section(kind)
            if isinstance(entry, dict) and entry.get("name")
        ]
