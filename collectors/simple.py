"""Collector for scalar device metrics merged into one record per poll"""
from typing import Iterator, Sequence
from .base import BaseCollector
from .cache import CallCache
from catalog.base import ServiceCatalog
from catalog.errors import ActionCallError
from metrics.definitions import SimpleMetricSpec
from metrics.models import MetricRecord
from logging_config import get_logger


logger = get_logger(__name__)

MEASUREMENT = "fritzbox"


def collect_simple(catalog: ServiceCatalog, specs: Sequence[SimpleMetricSpec], host: str) -> MetricRecord:
    """Walk the simple specs in order and merge every extracted field into one record

    Consecutive specs for the same service and action share one call. A spec
    whose service, action, call or result key fails is skipped on its own,
    so the record may carry only part of the fields.
    """
    cache = CallCache()
    fields = {}
    
    for spec in specs:
        if cache.should_call(spec.service, spec.action):
            service = catalog.services.get(spec.service)
            if service is None:
                logger.warning("Cannot find defined service", service=spec.service, event_type="service_missing")
                cache = CallCache()
                continue
            
            action = service.actions.get(spec.action)
            if action is None:
                logger.warning(
                    "Cannot find defined action on service",
                    service=spec.service,
                    action=spec.action,
                    event_type="action_missing"
                )
                cache = CallCache()
                continue
            
            try:
                result = action.call()
            except ActionCallError as e:
                logger.error(
                    "Unable to call action on service",
                    service=spec.service,
                    action=spec.action,
                    error=str(e),
                    event_type="action_call_error"
                )
                cache = CallCache()
                continue
            
            cache = cache.remember(spec.service, spec.action, result)
        
        if spec.result_key not in cache.result:
            logger.warning(
                "Result key not found",
                service=spec.service,
                action=spec.action,
                result_key=spec.result_key,
                event_type="result_missing"
            )
            continue
        
        # Later specs win on field name collisions
        fields[spec.field_name] = cache.result[spec.result_key]
    
    return MetricRecord(measurement=MEASUREMENT, fields=fields, tags={"fritzbox": host})


class SimpleMetricCollector(BaseCollector):
    """Collect the scalar WAN and connection metrics of the device"""
    
    def __init__(self, config=None, specs: Sequence[SimpleMetricSpec] = ()):
        super().__init__(config, "simple", "Scalar device metrics merged into the fritzbox measurement")
        self.specs = tuple(specs)
    
    def collect(self, catalog: ServiceCatalog, host: str) -> Iterator[MetricRecord]:
        yield collect_simple(catalog, self.specs, host)
