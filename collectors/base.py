"""Base collector class for catalog driven collectors"""
from abc import ABC, abstractmethod
from typing import Iterator
from catalog.base import ServiceCatalog
from metrics.models import MetricRecord


class BaseCollector(ABC):
    """Base class for all metric collectors"""
    
    def __init__(self, config=None, name: str = "", help_text: str = ""):
        self.config = config
        self._name = name
        self._help_text = help_text
    
    @abstractmethod
    def collect(self, catalog: ServiceCatalog, host: str) -> Iterator[MetricRecord]:
        """Collect records from a resolved catalog, yielding them as they are produced"""
        pass
    
    @property
    def name(self) -> str:
        """Collector name for identification"""
        return self._name
    
    @property
    def help_text(self) -> str:
        """Help text describing what this collector does"""
        return self._help_text or f"{self.name} metrics collector"
    
    def is_enabled(self) -> bool:
        """Check if this collector is enabled"""
        if hasattr(self.config, 'is_collector_enabled'):
            return self.config.is_collector_enabled(self.name)
        return True
