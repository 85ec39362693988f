"""Service-catalog instance parsing and caching.

`svcat get instances` prints a title line, a column header line and one
whitespace-aligned row per instance:

    NAME      NAMESPACE   CLASS       PLAN    STATUS
    mydb      default     mysqldb     free    Ready

Rows are mapped positionally to ServiceInstanceRecord. Parsing is
permissive: short rows leave trailing fields as None and extra columns
are ignored.
"""

import logging
from typing import Callable, Optional

from svcbind.models.binding import ServiceInstanceRecord


logger = logging.getLogger(__name__)

# Title and column header
HEADER_LINES = 2

INSTANCE_FIELDS = ("name", "namespace", "class_name", "plan", "status")


def parse_instance_row(line: str) -> ServiceInstanceRecord:
    """Map one whitespace-separated row onto a record."""
    tokens = line.split()
    values = tokens[: len(INSTANCE_FIELDS)]
    values += [None] * (len(INSTANCE_FIELDS) - len(values))
    return ServiceInstanceRecord(**dict(zip(INSTANCE_FIELDS, values)))


def parse_instance_table(text: str) -> list[ServiceInstanceRecord]:
    """Parse tabular CLI output into records, in source order.

    Args:
        text: Raw stdout of `svcat get instances`

    Returns:
        One record per non-empty line after the two header lines
    """
    rows = [line for line in text.split("\n")[HEADER_LINES:] if line.strip()]
    return [parse_instance_row(line) for line in rows]


class InstanceCache:
    """Discovered service-catalog instances for one process run.

    Holds three views that are kept in step: the ordered instance names,
    a name -> record mapping and the ordered records. The cache is filled
    by the first successful discovery and is not refreshed afterwards
    unless invalidate() is called.
    """

    def __init__(self) -> None:
        self.names: list[str] = []
        self.by_name: dict[str, ServiceInstanceRecord] = {}
        self.records: list[ServiceInstanceRecord] = []

    def is_empty(self) -> bool:
        return not self.names or not self.by_name

    def add(self, record: ServiceInstanceRecord) -> None:
        if record.name in self.by_name:
            index = self.names.index(record.name)
            self.records[index] = record
        else:
            self.names.append(record.name)
            self.records.append(record)
        self.by_name[record.name] = record

    def ingest(self, text: str) -> list[ServiceInstanceRecord]:
        """Parse tabular output and add every row to the cache."""
        parsed = []
        for record in parse_instance_table(text):
            self.add(record)
            parsed.append(record)
        logger.debug("Cached %d service instances", len(parsed))
        return parsed

    def get(
        self, discover: Callable[[], Optional[str]]
    ) -> Optional[list[ServiceInstanceRecord]]:
        """Return cached records, running discovery only when empty.

        Args:
            discover: Returns the raw instance table, or None on failure

        Returns:
            The cached records, or None if discovery failed
        """
        if not self.is_empty():
            return list(self.records)

        text = discover()
        if text is None:
            return None
        self.ingest(text)
        return list(self.records)

    def get_record(self, name: str) -> Optional[ServiceInstanceRecord]:
        return self.by_name.get(name)

    def invalidate(self) -> None:
        """Forget every cached instance so the next get() rediscovers."""
        self.names.clear()
        self.by_name.clear()
        self.records.clear()
