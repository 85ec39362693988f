"""Locate the Helm chart whose values file receives the bindings."""

import logging
from pathlib import Path
from typing import Optional

from svcbind.config import Config, config as default_config
from svcbind.services.host import HostInterface


logger = logging.getLogger(__name__)


class ChartNotFoundError(LookupError):
    """Raised when no chart directory exists below the search root."""
    pass


class ChartLocator:
    """Finds chart directories (those containing Chart.yaml) under a root."""

    def __init__(
        self,
        host: HostInterface,
        root: Path | str = ".",
        config: Optional[Config] = None,
    ):
        self.host = host
        self.root = Path(root)
        self.config = config or default_config

    def find_charts(self) -> list[Path]:
        charts = []
        for chart_file in sorted(self.root.rglob(self.config.chart_filename)):
            relative = chart_file.relative_to(self.root)
            # skip .git, .cache and friends
            if any(part.startswith(".") for part in relative.parts[:-1]):
                continue
            charts.append(chart_file.parent)
        return charts

    def pick(self, explicit: Path | str | None = None) -> Optional[Path]:
        """Resolve the chart directory to work on.

        Args:
            explicit: Chart directory given on the command line

        Returns:
            The chart directory, or None if the user cancelled the pick

        Raises:
            ChartNotFoundError: If no chart exists below the root
        """
        if explicit is not None:
            explicit = Path(explicit)
            # a values.yaml or Chart.yaml path selects its chart
            return explicit.parent if explicit.is_file() else explicit

        charts = self.find_charts()
        if not charts:
            raise ChartNotFoundError(f"Couldn't find any charts in {self.root}")
        if len(charts) == 1:
            logger.debug("Using chart %s", charts[0])
            return charts[0]

        labels = [str(chart.relative_to(self.root)) for chart in charts]
        selected = self.host.choose(labels, "Select a chart")
        if selected is None:
            return None
        return self.root / selected
