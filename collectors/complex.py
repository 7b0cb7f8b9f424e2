"""Collector for numbered service families with per-element records"""
from typing import Iterator, Optional, Sequence
from .base import BaseCollector
from .cache import CallCache
from catalog.base import Result, Service, ServiceCatalog
from catalog.errors import ActionCallError
from metrics.definitions import ComplexMetricSpec, service_instance_id
from metrics.models import MetricRecord, ValueKind, classify_value, stringify_tag
from logging_config import get_logger


logger = get_logger(__name__)


def collect_complex(catalog: ServiceCatalog, specs: Sequence[ComplexMetricSpec], host: str) -> Iterator[MetricRecord]:
    """Yield one record per element of every instance of every complex spec

    For instance ``i`` of a spec the count action tells how many elements the
    instance holds, then the per-element action is called with indices
    ``0..count-1``. Failures skip only the instance or element they hit.
    """
    cache = CallCache()
    
    for spec in specs:
        for index in range(1, spec.instance_count + 1):
            service_id = service_instance_id(spec.service_prefix, index)
            service = catalog.services.get(service_id)
            if service is None:
                logger.warning("Cannot find defined service", service=service_id, event_type="service_missing")
                cache = CallCache()
                continue
            
            cache, count = _element_count(cache, service, service_id, spec)
            if not count:
                continue
            
            yield from _collect_elements(service, service_id, index, count, spec, host)


def _element_count(cache: CallCache, service: Service, service_id: str, spec: ComplexMetricSpec):
    """Return the updated cache and the instance's element count, None when unusable"""
    if cache.should_call(service_id, spec.count_action):
        action = service.actions.get(spec.count_action)
        if action is None:
            logger.warning(
                "Cannot find defined action on service",
                service=service_id,
                action=spec.count_action,
                event_type="action_missing"
            )
            return CallCache(), None
        
        try:
            result = action.call()
        except ActionCallError as e:
            logger.error(
                "Unable to call action on service",
                service=service_id,
                action=spec.count_action,
                error=str(e),
                event_type="action_call_error"
            )
            return CallCache(), None
        
        cache = cache.remember(service_id, spec.count_action, result)
    
    if spec.count_result_key not in cache.result:
        logger.warning(
            "Result key not found",
            service=service_id,
            action=spec.count_action,
            result_key=spec.count_result_key,
            event_type="result_missing"
        )
        return cache, None
    
    value = cache.result[spec.count_result_key]
    kind = classify_value(value)
    if kind is ValueKind.UINT:
        return cache, value
    
    logger.warning(
        "Unrecognized type for element count",
        service=service_id,
        action=spec.count_action,
        result_key=spec.count_result_key,
        value=repr(value),
        kind=kind.value,
        event_type="unrecognized_type"
    )
    return cache, None


def _collect_elements(service: Service, service_id: str, index: int, count: int,
                      spec: ComplexMetricSpec, host: str) -> Iterator[MetricRecord]:
    for element in range(count):
        result = _call_element(service, service_id, spec, element)
        if result is None:
            continue
        
        tags = {"service": str(index), "fritzbox": host}
        for tag_name, result_key in spec.tag_extract.items():
            tags[tag_name] = stringify_tag(result.get(result_key))
        
        fields = {}
        for field_name, result_key in spec.field_extract.items():
            if result_key in result:
                fields[field_name] = result[result_key]
        
        yield MetricRecord(measurement=spec.measurement_name, fields=fields, tags=tags)


def _call_element(service: Service, service_id: str, spec: ComplexMetricSpec, element: int) -> Optional[Result]:
    action = service.actions.get(spec.per_element_action)
    if action is None:
        logger.warning(
            "Cannot find defined action on service",
            service=service_id,
            action=spec.per_element_action,
            index=element,
            event_type="action_missing"
        )
        return None
    
    try:
        return action.call_with_param(spec.index_param, element)
    except ActionCallError as e:
        logger.error(
            "Unable to call action on service",
            service=service_id,
            action=spec.per_element_action,
            index=element,
            error=str(e),
            event_type="action_call_error"
        )
        return None


class ComplexMetricCollector(BaseCollector):
    """Collect per-element records such as connected WLAN devices"""
    
    def __init__(self, config=None, specs: Sequence[ComplexMetricSpec] = ()):
        super().__init__(config, "complex", "Per-element records of numbered service instances")
        self.specs = tuple(specs)
    
    def collect(self, catalog: ServiceCatalog, host: str) -> Iterator[MetricRecord]:
        return collect_complex(catalog, self.specs, host)
