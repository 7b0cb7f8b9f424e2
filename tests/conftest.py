"""Shared fixtures: in-memory service catalogs that count invocations"""
import pytest

from catalog.errors import ActionCallError


class FakeAction:
    """Action returning a fixed result, or per-index results for parameterized calls"""

    def __init__(self, service, name, result=None, per_index=None, fail=False, fail_indices=()):
        self.service = service
        self.name = name
        self.result = result or {}
        self.per_index = per_index
        self.fail = fail
        self.fail_indices = set(fail_indices)
        self.calls = []

    def call(self):
        self.calls.append(None)
        if self.fail:
            raise ActionCallError(self.service, self.name, "device returned a fault")
        return dict(self.result)

    def call_with_param(self, name, value):
        self.calls.append((name, value))
        if self.fail or value in self.fail_indices:
            raise ActionCallError(self.service, self.name, f"no element at {value}")
        if self.per_index is not None:
            return dict(self.per_index(value))
        return dict(self.result)


class FakeService:
    def __init__(self, actions=None):
        self.actions = actions or {}


class FakeCatalog:
    def __init__(self, services=None):
        self.services = services or {}

    def add_action(self, service_id, name, **kwargs):
        service = self.services.setdefault(service_id, FakeService())
        action = FakeAction(service_id, name, **kwargs)
        service.actions[name] = action
        return action


class RecordingSink:
    def __init__(self):
        self.calls = []

    def add_fields(self, measurement, fields, tags):
        self.calls.append((measurement, dict(fields), dict(tags)))


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def sink():
    return RecordingSink()
