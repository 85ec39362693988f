"""Usage hints for bound services.

After a binding is recorded the chart templates expose it to the
application as environment variables. These helpers derive the variable
names and put a short comment block on the clipboard describing them.
"""

from typing import Iterable

from svcbind.services.host import ClipboardInterface, HostInterface


class UsageHintService:
    """Formats environment variable hints for the clipboard."""

    def service_env_var(self, name: str) -> str:
        return f"SERVICE_{name.upper()}"

    def catalog_env_vars(self, binding_name: str, keys: Iterable[str]) -> list[str]:
        return [f"{binding_name}_{key}".upper() for key in keys]

    def service_hint(self, name: str) -> str:
        return (
            f"// To use service {name}, we added an environment variable "
            f"containing the DNS hostname: {self.service_env_var(name)}"
        )

    def catalog_hint(self, binding_name: str, keys: Iterable[str]) -> str:
        lines = [f"// {var}" for var in self.catalog_env_vars(binding_name, keys)]
        header = (
            f"// To use service {binding_name}, we added a number of environment variables\n"
            "// to your application, as listed below:"
        )
        return "\n".join([header, *lines])

    def write_service_hint(self, name: str, clipboard: ClipboardInterface) -> str:
        message = self.service_hint(name)
        clipboard.write(message)
        return message

    def write_catalog_hint(
        self,
        binding_name: str,
        keys: Iterable[str],
        clipboard: ClipboardInterface,
        host: HostInterface,
    ) -> str:
        host.info("Wrote Service Usage information to your clipboard.")
        message = self.catalog_hint(binding_name, keys)
        clipboard.write(message)
        return message
