# Data Models

from svcbind.models.binding import (
    BindingEntry,
    BindingKind,
    ServiceCatalogBinding,
    ServiceDescriptor,
    ServiceEnvBinding,
    ServiceInstanceRecord,
    ValuesDocument,
)

__all__ = [
    "BindingEntry",
    "BindingKind",
    "ServiceCatalogBinding",
    "ServiceDescriptor",
    "ServiceEnvBinding",
    "ServiceInstanceRecord",
    "ValuesDocument",
]
