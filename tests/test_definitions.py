"""Tests for metric definitions and service identifiers"""
import pytest

from metrics.definitions import (
    DEFAULT_DEFINITIONS,
    ComplexMetricSpec,
    SimpleMetricSpec,
    service_instance_id,
)


class TestServiceInstanceId:
    """Instance identifiers are the prefix, a colon and a 1-based number"""

    def test_first_instance(self):
        assert service_instance_id("WLANConfiguration", 1) == "WLANConfiguration:1"

    def test_urn_prefix(self):
        prefix = "urn:dslforum-org:service:WLANConfiguration"
        assert service_instance_id(prefix, 3) == "urn:dslforum-org:service:WLANConfiguration:3"

    def test_zero_is_rejected(self):
        with pytest.raises(ValueError):
            service_instance_id("WLANConfiguration", 0)


class TestDefaultDefinitions:
    """Test the shipped definition table"""

    def test_simple_specs(self):
        names = [spec.field_name for spec in DEFAULT_DEFINITIONS.simple]

        assert names == [
            "packets_received",
            "packets_sent",
            "bytes_received",
            "bytes_sent",
            "link_status",
            "connection_status",
            "uptime",
        ]

    def test_specs_for_same_action_are_adjacent(self):
        """Every (service, action) pair appears as one consecutive run"""
        pairs = [(spec.service, spec.action) for spec in DEFAULT_DEFINITIONS.simple]
        runs = [pair for i, pair in enumerate(pairs) if i == 0 or pairs[i - 1] != pair]

        assert len(runs) == len(set(pairs))

    def test_wifi_spec(self):
        (wifi,) = DEFAULT_DEFINITIONS.complex

        assert wifi.measurement_name == "fritzbox-wifi"
        assert wifi.instance_count == 3
        assert wifi.index_param == "NewAssociatedDeviceIndex"
        assert dict(wifi.tag_extract) == {
            "wlan_device_mac": "AssociatedDeviceMACAddress",
            "wlan_device_ip": "AssociatedDeviceIPAddress",
        }
        assert dict(wifi.field_extract) == {
            "wlan_device_signal": "X_AVM-DE_SignalStrength",
            "wlan_device_speed": "X_AVM-DE_Speed",
        }

    def test_specs_are_immutable(self):
        spec = SimpleMetricSpec("svc", "GetThing", "Thing", "thing")

        with pytest.raises(AttributeError):
            spec.field_name = "other"

    def test_complex_spec_defaults(self):
        spec = ComplexMetricSpec("svc", 1, "GetCount", "Count", "GetItem", "items")

        assert dict(spec.tag_extract) == {}
        assert dict(spec.field_extract) == {}
