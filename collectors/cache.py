"""Consecutive-call cache for remote actions"""
from dataclasses import dataclass, replace
from typing import Optional
from catalog.base import Result


@dataclass(frozen=True)
class CallCache:
    """Result of the most recently invoked (service, action) pair

    Only the immediately preceding pair is remembered. Definitions that target
    the same action but are not adjacent call it again, and a skipped
    definition clears the cache.
    """
    service: Optional[str] = None
    action: Optional[str] = None
    result: Optional[Result] = None

    def should_call(self, service: str, action: str) -> bool:
        return (service, action) != (self.service, self.action)

    def remember(self, service: str, action: str, result: Result) -> "CallCache":
        return replace(self, service=service, action=action, result=result)
