"""Metrics registry orchestrating one poll of the device"""
import time
from typing import Dict, List, Optional
from catalog.base import CatalogLoader, ServiceCatalog
from collectors.base import BaseCollector
from collectors.complex import ComplexMetricCollector
from collectors.simple import SimpleMetricCollector
from config import Config
from .definitions import DEFAULT_DEFINITIONS, MetricDefinitions
from .sink import MetricSink
from logging_config import get_logger, log_poll_completed


logger = get_logger(__name__)


class GatherError(Exception):
    """A poll failed as a whole because the service catalog could not be loaded"""


class MetricsRegistry:
    """Central registry for the device collectors

    Collectors run in registration order against one catalog that is loaded
    fresh for every poll and dropped afterwards.
    """
    
    def __init__(self, config: Config, loader: CatalogLoader,
                 definitions: Optional[MetricDefinitions] = None):
        self.config = config
        self.loader = loader
        self.definitions = definitions or DEFAULT_DEFINITIONS
        self.collectors: Dict[str, BaseCollector] = {}
        self.register_collector(SimpleMetricCollector(config, self.definitions.simple))
        self.register_collector(ComplexMetricCollector(config, self.definitions.complex))
    
    def register_collector(self, collector: BaseCollector):
        """Register a new collector"""
        if not isinstance(collector, BaseCollector):
            raise ValueError("Collector must inherit from BaseCollector")
        
        self.collectors[collector.name] = collector
        logger.debug("Registered collector", collector=collector.name)
    
    def get_collector(self, name: str) -> Optional[BaseCollector]:
        """Get collector by name"""
        return self.collectors.get(name)
    
    def list_collectors(self) -> List[str]:
        """List all registered collector names"""
        return list(self.collectors.keys())
    
    def load_catalog(self, host: str, port: int) -> ServiceCatalog:
        """Resolve the service catalog, wrapping any failure in GatherError"""
        try:
            return self.loader(host, port, self.config.username, self.config.password)
        except Exception as e:
            logger.error("Unable to load services", host=host, port=port, error=str(e), event_type="catalog_error")
            raise GatherError(f"fritzbox: unable to load services: {e}") from e
    
    def gather(self, sink: MetricSink) -> int:
        """Run one poll, emitting records to the sink as they are produced

        Returns the number of emitted records. Skipped metrics are logged and
        do not fail the poll; only a catalog that cannot be loaded does.
        """
        start_time = time.time()
        host = self.config.effective_host()
        port = self.config.effective_port()
        
        catalog = self.load_catalog(host, port)
        
        emitted = 0
        for name, collector in self.collectors.items():
            if not collector.is_enabled():
                continue
            
            try:
                for record in collector.collect(catalog, host):
                    sink.add_fields(record.measurement, record.fields, record.tags)
                    emitted += 1
            except Exception as e:
                logger.error("Collector failed", collector=name, error=str(e), event_type="collection_error", exc_info=True)
                # Continue with other collectors even if one fails
        
        log_poll_completed(logger, emitted, time.time() - start_time, host)
        return emitted
    
    def get_collector_status(self) -> Dict[str, Dict]:
        """Get status information for all collectors"""
        status = {}
        
        for name, collector in self.collectors.items():
            status[name] = {
                "enabled": collector.is_enabled(),
                "class": collector.__class__.__name__,
                "help": collector.help_text
            }
        
        return status
