"""
Base collector interface for metric collection.

Collectors inherit from the abstract Collector class and implement
collect() to produce the metric records of one cycle.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import datetime

from ..logging import get_logger
from ..models.metric import MetricRecord


@dataclass
class CollectorResult:
    """Result of a collection cycle."""

    # Records in emission order
    records: list[MetricRecord] = field(default_factory=list)

    # Source state (online, error)
    state: str = "online"

    # Collector availability
    available: bool = True

    # Error message if collection failed
    error: str | None = None

    # Collection timestamp
    timestamp: datetime = field(default_factory=datetime.now)

    def extend(self, records: list[MetricRecord]) -> None:
        """Append several records."""
        self.records.extend(records)

    def set_error(self, error: str) -> None:
        """Mark collection as failed; a failed cycle has no records."""
        self.available = False
        self.error = error
        self.state = "error"
        self.records = []

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        status = "OK" if self.available else f"ERROR: {self.error}"
        return f"CollectorResult({len(self.records)} records, state={self.state}, {status})"


class Collector(ABC):
    """
    Abstract base class for metric collectors.

    A collector runs one cycle per collect() call and keeps no state
    between cycles. Cycles of one collector must not overlap.
    """

    # Subsystem name (override in subclasses)
    SUBSYSTEM: str = "unknown"

    def __init__(
        self,
        name: str,
        update_interval: float = 15.0,
    ):
        """
        Initialize collector.

        Args:
            name: Human-readable collector name
            update_interval: Collection interval in seconds
        """
        self.name = name
        self.update_interval = update_interval
        self.logger = get_logger(f"collectors.{self.SUBSYSTEM}")

        self._last_result: CollectorResult | None = None

    @abstractmethod
    async def collect(self) -> CollectorResult:
        """
        Collect metrics from the source.

        Returns:
            CollectorResult with the cycle's records

        Raises:
            Exception: If the cycle cannot be performed at all
        """
        pass

    @property
    def last_result(self) -> CollectorResult | None:
        """Result of the most recent cycle."""
        return self._last_result

    async def safe_collect(self) -> CollectorResult:
        """
        Collect metrics, turning a failed cycle into an error result.

        Returns:
            CollectorResult, with error set if collection failed
        """
        try:
            result = await self.collect()
        except Exception as e:
            result = CollectorResult()
            result.set_error(str(e))

        self._last_result = result
        return result

    async def run_forever(self) -> AsyncIterator[CollectorResult]:
        """
        Run collector in a loop, yielding results.

        Yields:
            CollectorResult after each collection cycle
        """
        while True:
            yield await self.safe_collect()
            await asyncio.sleep(self.update_interval)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, {self.update_interval}s)"
