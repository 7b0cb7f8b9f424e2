"""Tests for the Prometheus exporter"""
import tempfile
from pathlib import Path

from metrics.exporters.prometheus import PrometheusExporter
from metrics.models import MetricRecord


RECORDS = [
    MetricRecord("fritzbox", {"uptime": 3600, "connection_status": "Connected"}, {"fritzbox": "fritz.box"}),
    MetricRecord("fritzbox-wifi", {"wlan_device_signal": 70}, {"service": "1", "wlan_device_mac": "aa:bb"}),
    MetricRecord("fritzbox-wifi", {"wlan_device_signal": 40}, {"service": "2", "wlan_device_mac": "cc:dd"}),
]


class TestPrometheusExporter:
    """Test rendering and file export"""

    def test_render_groups_type_comments(self):
        content = PrometheusExporter().render(RECORDS)

        assert content.count("# TYPE fritzbox_wifi_wlan_device_signal gauge") == 1
        assert 'fritzbox_uptime{fritzbox="fritz.box"} 3600' in content
        assert 'fritzbox_wifi_wlan_device_signal{service="2",wlan_device_mac="cc:dd"} 40' in content
        assert "Connected" not in content

    def test_render_drops_duplicate_series(self):
        records = [
            MetricRecord("fritzbox-wifi", {"wlan_device_signal": 70}, {"service": "1", "wlan_device_mac": ""}),
            MetricRecord("fritzbox-wifi", {"wlan_device_signal": 40}, {"service": "1", "wlan_device_mac": ""}),
        ]

        content = PrometheusExporter().render(records)

        assert content.count("fritzbox_wifi_wlan_device_signal{") == 1
        assert 'fritzbox_wifi_wlan_device_signal{service="1",wlan_device_mac=""} 70' in content

    def test_render_empty(self):
        assert PrometheusExporter().render([]) == "# No metrics available\n"

    def test_export_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            metrics_file = Path(tmp_dir) / "data" / "fritzbox.prom"
            exporter = PrometheusExporter(metrics_file)

            content = exporter.export_records(RECORDS)

            assert metrics_file.read_text(encoding="utf-8") == content
            assert not metrics_file.with_suffix(".tmp").exists()
            assert exporter.is_healthy() is True
