"""Static metric definitions for a FRITZ!Box style device

Definitions are plain frozen value records built once at import time and
injected into the collectors. Simple specs that target the same service and
action are declared next to each other so the collectors can reuse one call.
"""
from dataclasses import dataclass, field
from typing import Mapping, Tuple
from types import MappingProxyType


@dataclass(frozen=True)
class SimpleMetricSpec:
    """One scalar extracted from a parameterless action"""
    service: str
    action: str
    result_key: str
    field_name: str


@dataclass(frozen=True)
class ComplexMetricSpec:
    """A numbered service family with a per-element detail action

    Instances are named ``<service_prefix>:1`` .. ``<service_prefix>:<instance_count>``.
    ``count_action`` returns how many elements an instance holds and
    ``per_element_action`` is called once per element index starting at 0.
    """
    service_prefix: str
    instance_count: int
    count_action: str
    count_result_key: str
    per_element_action: str
    measurement_name: str
    tag_extract: Mapping[str, str] = field(default_factory=dict)
    field_extract: Mapping[str, str] = field(default_factory=dict)
    index_param: str = "NewAssociatedDeviceIndex"


@dataclass(frozen=True)
class MetricDefinitions:
    simple: Tuple[SimpleMetricSpec, ...] = ()
    complex: Tuple[ComplexMetricSpec, ...] = ()


def service_instance_id(prefix: str, index: int) -> str:
    """Concrete service identifier of instance ``index`` (1-based)"""
    if index < 1:
        raise ValueError(f"service instances are numbered from 1, got {index}")
    return f"{prefix}:{index}"


WAN_COMMON_INTERFACE = "urn:schemas-upnp-org:service:WANCommonInterfaceConfig:1"
WAN_IP_CONNECTION = "urn:schemas-upnp-org:service:WANIPConnection:1"
WLAN_CONFIGURATION = "urn:dslforum-org:service:WLANConfiguration"

SIMPLE_METRICS = (
    SimpleMetricSpec(WAN_COMMON_INTERFACE, "GetTotalPacketsReceived", "TotalPacketsReceived", "packets_received"),
    SimpleMetricSpec(WAN_COMMON_INTERFACE, "GetTotalPacketsSent", "TotalPacketsSent", "packets_sent"),
    SimpleMetricSpec(WAN_COMMON_INTERFACE, "GetAddonInfos", "TotalBytesReceived", "bytes_received"),
    SimpleMetricSpec(WAN_COMMON_INTERFACE, "GetAddonInfos", "TotalBytesSent", "bytes_sent"),
    SimpleMetricSpec(WAN_COMMON_INTERFACE, "GetCommonLinkProperties", "PhysicalLinkStatus", "link_status"),
    SimpleMetricSpec(WAN_IP_CONNECTION, "GetStatusInfo", "ConnectionStatus", "connection_status"),
    SimpleMetricSpec(WAN_IP_CONNECTION, "GetStatusInfo", "Uptime", "uptime"),
)

COMPLEX_METRICS = (
    ComplexMetricSpec(
        service_prefix=WLAN_CONFIGURATION,
        instance_count=3,
        count_action="GetTotalAssociations",
        count_result_key="TotalAssociations",
        per_element_action="GetGenericAssociatedDeviceInfo",
        measurement_name="fritzbox-wifi",
        tag_extract=MappingProxyType({
            "wlan_device_mac": "AssociatedDeviceMACAddress",
            "wlan_device_ip": "AssociatedDeviceIPAddress",
        }),
        field_extract=MappingProxyType({
            "wlan_device_signal": "X_AVM-DE_SignalStrength",
            "wlan_device_speed": "X_AVM-DE_Speed",
        }),
    ),
)

DEFAULT_DEFINITIONS = MetricDefinitions(simple=SIMPLE_METRICS, complex=COMPLEX_METRICS)
