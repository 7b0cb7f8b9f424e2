"""Tests for records, value kinds and the call cache"""
from collectors.cache import CallCache
from metrics.models import MetricRecord, ValueKind, classify_value, stringify_tag


class TestValueKind:
    """Test classification of dynamically typed result values"""

    def test_string(self):
        assert classify_value("Connected") is ValueKind.STRING

    def test_unsigned_integer(self):
        assert classify_value(0) is ValueKind.UINT
        assert classify_value(42) is ValueKind.UINT

    def test_unknown(self):
        assert classify_value(-1) is ValueKind.UNKNOWN
        assert classify_value(True) is ValueKind.UNKNOWN
        assert classify_value(1.5) is ValueKind.UNKNOWN
        assert classify_value(None) is ValueKind.UNKNOWN

    def test_stringify_tag(self):
        assert stringify_tag("aa:bb") == "aa:bb"
        assert stringify_tag(7) == "7"
        assert stringify_tag(None) == ""


class TestCallCache:
    """Only the immediately preceding pair is remembered"""

    def test_empty_cache_calls(self):
        assert CallCache().should_call("svc", "GetA") is True

    def test_same_pair_is_reused(self):
        cache = CallCache().remember("svc", "GetA", {"A": 1})

        assert cache.should_call("svc", "GetA") is False
        assert cache.result == {"A": 1}

    def test_other_pair_calls(self):
        cache = CallCache().remember("svc", "GetA", {"A": 1})

        assert cache.should_call("svc", "GetB") is True
        assert cache.should_call("other", "GetA") is True

    def test_remember_returns_new_cache(self):
        empty = CallCache()
        cache = empty.remember("svc", "GetA", {})

        assert empty.service is None
        assert cache.service == "svc"


class TestMetricRecord:
    """Test Prometheus rendering of records"""

    def test_numeric_fields_only(self):
        record = MetricRecord(
            measurement="fritzbox",
            fields={"uptime": 10, "connection_status": "Connected"},
            tags={"fritzbox": "fritz.box"},
        )

        assert record.to_prometheus_lines() == ['fritzbox_uptime{fritzbox="fritz.box"} 10']

    def test_measurement_dashes(self):
        record = MetricRecord(measurement="fritzbox-wifi", fields={"wlan_device_speed": 433}, tags={})

        assert record.to_prometheus_lines() == ["fritzbox_wifi_wlan_device_speed 433"]

    def test_none_maps(self):
        record = MetricRecord(measurement="fritzbox", fields=None, tags=None)

        assert record.fields == {}
        assert record.tags == {}
