"""
Optional component capabilities.

A model gains a capability by having the right methods, never by
declaring an interface. Each protocol below is checked structurally
once per model class.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Component(Protocol):
    def init_component(self, this: Any) -> None: ...


@runtime_checkable
class Updateable(Protocol):
    def register_component(self, update: Any) -> None: ...

    async def update_component(self) -> None: ...


@runtime_checkable
class LifecycleListener(Protocol):
    def created(self) -> None: ...

    def ready(self) -> None: ...

    def attached(self) -> None: ...

    def dom_ready(self) -> None: ...

    def detached(self) -> None: ...


@runtime_checkable
class PropertyListener(Protocol):
    def property_changed(self, field_name: str, old_value: Any, new_value: Any) -> None: ...


@runtime_checkable
class AttributeListener(Protocol):
    def attribute_changed(self, attr_name: str, old_value: Any, new_value: Any) -> None: ...


@dataclass(frozen=True)
class CapabilitySet:
    """Which optional contracts a model class satisfies."""
    lifecycle: bool = False
    property_change: bool = False
    attribute_change: bool = False
    updateable: bool = False
    component: bool = False


@lru_cache(maxsize=None)
def classify(model_cls: type) -> CapabilitySet:
    return CapabilitySet(
        lifecycle=issubclass(model_cls, LifecycleListener),
        property_change=issubclass(model_cls, PropertyListener),
        attribute_change=issubclass(model_cls, AttributeListener),
        updateable=issubclass(model_cls, Updateable),
        component=issubclass(model_cls, Component),
    )
