"""Prometheus text exporter for polled device records"""
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from metrics.models import MetricRecord
from logging_config import get_logger


logger = get_logger(__name__)


class PrometheusExporter:
    """Render records in Prometheus exposition format and optionally write them to a file"""
    
    def __init__(self, metrics_file: Optional[Path] = None):
        self.metrics_file = metrics_file
        self._healthy = True
    
    def render(self, records: List[MetricRecord]) -> str:
        """Generate Prometheus exposition format output"""
        if not records:
            return "# No metrics available\n"
        
        lines = [f"# Generated at {datetime.now().astimezone().isoformat()}"]
        
        # Group lines by metric name to avoid duplicate TYPE comments,
        # keeping only the first sample of each series
        series_by_name = {}
        for record in records:
            for line in record.to_prometheus_lines():
                series = line.rsplit(" ", 1)[0]
                metric_name = series.split("{", 1)[0]
                metric_series = series_by_name.setdefault(metric_name, {})
                if series in metric_series:
                    logger.debug("Dropped duplicate series", series=series)
                    continue
                metric_series[series] = line
        
        for metric_name, metric_series in series_by_name.items():
            lines.append(f"# TYPE {metric_name} gauge")
            lines.extend(metric_series.values())
        
        return "\n".join(lines) + "\n"
    
    def export_records(self, records: List[MetricRecord]) -> str:
        """Render records and write them atomically when a file is configured"""
        content = self.render(records)
        if self.metrics_file is None:
            return content
        
        try:
            self.metrics_file.parent.mkdir(parents=True, exist_ok=True)
            temp_file = self.metrics_file.with_suffix('.tmp')
            temp_file.write_text(content, encoding='utf-8')
            temp_file.replace(self.metrics_file)
            self._healthy = True
            logger.debug("Exported records to Prometheus file", records=len(records), path=str(self.metrics_file))
        except OSError as e:
            logger.error("Failed to write Prometheus metrics", path=str(self.metrics_file), error=str(e))
            self._healthy = False
        
        return content
    
    def is_healthy(self) -> bool:
        """Check if the last write succeeded"""
        return self._healthy
