"""ValuesService for reading and rewriting a chart's values.yaml.

This module loads the values document, checks and applies binding entries
in the `serviceEnv` / `serviceCatalogEnv` sections, and persists the whole
document back with an atomic replace.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml

from svcbind.config import Config, config as default_config
from svcbind.models.binding import BindingEntry, BindingKind, ValuesDocument


logger = logging.getLogger(__name__)


class ValuesError(ValueError):
    """Base class for values document failures."""
    pass


class ValuesNotFoundError(ValuesError):
    """Raised when the values file does not exist."""
    pass


class ValuesParseError(ValuesError):
    """Raised when YAML parsing fails with line number information."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            super().__init__(f"Line {line}: {message}")
        else:
            super().__init__(message)


class ValuesService:
    """Service for loading, mutating and saving chart values documents."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config

    def values_path(self, chart_dir: Path | str) -> Path:
        return Path(chart_dir) / self.config.values_filename

    def load(self, chart_dir: Path | str) -> ValuesDocument:
        """Load the values file of a chart.

        Args:
            chart_dir: Chart directory chosen by the chart locator

        Returns:
            ValuesDocument with the file path and parsed content

        Raises:
            ValuesNotFoundError: If the values file does not exist
            ValuesParseError: If the file is not a YAML mapping
        """
        path = self.values_path(chart_dir)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ValuesNotFoundError(f"{path} not found")
        except UnicodeDecodeError:
            raise ValuesParseError(f"{path} is not valid UTF-8")

        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            line = None
            if hasattr(e, "problem_mark") and e.problem_mark is not None:
                line = e.problem_mark.line + 1
            raise ValuesParseError(f"Invalid YAML in {path}: {e}", line=line)

        if content is None:
            content = {}
        if not isinstance(content, dict):
            raise ValuesParseError(f"{path} must contain a YAML mapping")

        for kind in BindingKind:
            self._check_section(path, kind, content.get(kind.value))

        return ValuesDocument(path=path, content=content)

    def _check_section(self, path: Path, kind: BindingKind, section: Any) -> None:
        # an absent or null section is fine, anything else must be a list
        if section is not None and not isinstance(section, list):
            raise ValuesParseError(
                f"{path}: {kind.value} must be a list of bindings, "
                f"got {type(section).__name__}"
            )

    def is_binding_present(
        self, kind: BindingKind, binding_name: str, content: dict[str, Any]
    ) -> bool:
        """Check whether a section already holds an entry with this name."""
        section = content.get(kind.value)
        if not isinstance(section, list):
            return False
        return any(
            isinstance(entry, dict) and entry.get("name") == binding_name
            for entry in section
        )

    def write(self, binding: BindingEntry, document: ValuesDocument) -> None:
        """Append a binding entry to its section and persist the document."""
        section = document.content.get(binding.kind.value)
        self._check_section(document.path, binding.kind, section)
        if section:
            section.append(binding.to_dict())
        else:
            document.content[binding.kind.value] = [binding.to_dict()]

        self.save(document)
        logger.info(
            "Added %s binding %s to %s", binding.kind.value, binding.name, document.path
        )

    def remove(self, kind: BindingKind, binding_name: str, document: ValuesDocument) -> bool:
        """Remove entries named binding_name from a section.

        Returns:
            True if an entry was removed and the document saved, False if
            nothing matched (the file is left untouched).
        """
        section = document.section(kind)
        pruned = [
            entry for entry in section
            if not (isinstance(entry, dict) and entry.get("name") == binding_name)
        ]
        if len(pruned) == len(section):
            return False

        document.content[kind.value] = pruned
        self.save(document)
        logger.info("Removed %s binding %s from %s", kind.value, binding_name, document.path)
        return True

    def dump(self, content: dict[str, Any]) -> str:
        return yaml.safe_dump(
            content, default_flow_style=False, sort_keys=False, indent=2
        )

    def save(self, document: ValuesDocument) -> None:
        """Rewrite the whole document via a temp file and an atomic rename.

        The target is never absent: either the old file or the complete new
        one is in place.
        """
        path = Path(document.path)
        serialized = self.dump(document.content)

        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(serialized)
            if path.exists():
                os.chmod(tmp_name, path.stat().st_mode & 0o777)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
