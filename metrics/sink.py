"""Metric sinks receiving flattened records"""
from typing import Any, List, Mapping, Protocol

from .models import MetricRecord


class MetricSink(Protocol):
    """Accumulator interface collectors emit into"""

    def add_fields(self, measurement: str, fields: Mapping[str, Any], tags: Mapping[str, str]) -> None:
        ...


class Accumulator:
    """In-memory sink keeping the records of one poll in emission order"""

    def __init__(self):
        self.records: List[MetricRecord] = []

    def add_fields(self, measurement: str, fields: Mapping[str, Any], tags: Mapping[str, str]) -> None:
        self.records.append(MetricRecord(measurement=measurement, fields=dict(fields), tags=dict(tags)))
