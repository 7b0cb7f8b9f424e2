"""Metric record models"""
from dataclasses import dataclass, field
from typing import Any, Dict, List
from enum import Enum


class ValueKind(Enum):
    """Dynamic type of a scalar returned by a remote action"""
    STRING = "string"
    UINT = "uint"
    UNKNOWN = "unknown"


def classify_value(value: Any) -> ValueKind:
    """Classify a result value; bools and negative ints are not unsigned"""
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return ValueKind.UINT
    return ValueKind.UNKNOWN


def stringify_tag(value: Any) -> str:
    """Render a result value as a tag value, missing values become empty"""
    if value is None:
        return ""
    kind = classify_value(value)
    if kind is ValueKind.STRING:
        return value
    return str(value)


@dataclass
class MetricRecord:
    """One measurement handed to a sink"""
    measurement: str
    fields: Dict[str, Any] = field(default_factory=dict)
    tags: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Ensure maps are never None
        if self.fields is None:
            self.fields = {}
        if self.tags is None:
            self.tags = {}

    @property
    def metric_prefix(self) -> str:
        return self.measurement.replace("-", "_")

    def to_prometheus_lines(self) -> List[str]:
        """Convert numeric fields to Prometheus exposition lines"""
        labels_str = ""
        if self.tags:
            label_pairs = [f'{k}="{_escape_label(v)}"' for k, v in sorted(self.tags.items())]
            labels_str = "{" + ",".join(label_pairs) + "}"

        lines = []
        for name, value in self.fields.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            lines.append(f"{self.metric_prefix}_{name}{labels_str} {value}")
        return lines


def _escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
