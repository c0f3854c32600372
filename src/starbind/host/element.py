"""
Host-side objects.

``Prototype`` is what a registration hands to the host; ``Element`` is one
live object the host creates from it. Name resolution on an element
follows the usual dynamic-object order: own properties first, then
prototype methods, then services the runtime provides.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List

from ..exceptions import HostError

if TYPE_CHECKING:
    from .runtime import HostRuntime

logger = logging.getLogger(__name__)

Watcher = Callable[[str, Any, Any], None]


@dataclass
class Prototype:
    """Element description: property defaults and ``(this, *args)`` methods."""
    properties: Dict[str, Any] = field(default_factory=dict)
    methods: Dict[str, Callable[..., Any]] = field(default_factory=dict)


class Element:
    """A dynamic object managed by the host runtime."""

    def __init__(self, tag_name: str, prototype: Prototype, runtime: 'HostRuntime'):
        self.tag_name = tag_name
        self.prototype = prototype
        self.runtime = runtime
        self.attributes: Dict[str, Any] = {}
        self.is_attached = False
        self._props: Dict[str, Any] = {}
        self._watchers: List[Watcher] = []
        self._listeners: Dict[str, List[Callable]] = {}
        self._debouncers: Dict[str, Any] = {}

    def get(self, name: str, default: Any = None) -> Any:
        return self._props.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._props

    def set(self, name: str, value: Any) -> None:
        """Raw property write. Watchers see public properties only."""
        old = self._props.get(name)
        self._props[name] = value
        if not name.startswith("__"):
            for watcher in list(self._watchers):
                watcher(name, old, value)

    def call(self, name: str, *args: Any) -> Any:
        if name in self._props:
            target = self._props[name]
            if not callable(target):
                raise HostError(f"<{self.tag_name}>.{name} is not a function")
            return target(*args)

        method = self.prototype.methods.get(name)
        if method is not None:
            return method(self, *args)

        service = self.runtime.service(name)
        if service is not None:
            return service(self, *args)

        raise HostError(f"<{self.tag_name}>.{name} is not a function")

    def set_property(self, name: str, value: Any) -> None:
        """Host-driven property change: store, then notify ``<name>Changed(old, new)``."""
        old = self._props.get(name)
        if old is value or old == value:
            return
        self.set(name, value)
        observer = name + "Changed"
        if observer in self.prototype.methods:
            self.call(observer, old, value)

    @property
    def properties(self) -> Dict[str, Any]:
        """Public data properties, without installed trampoline targets."""
        return {
            name: value for name, value in self._props.items()
            if not name.startswith("__") and not callable(value)
        }

    def watch(self, watcher: Watcher) -> Callable[[], None]:
        """Observe public property writes. Returns an unsubscribe callable."""
        self._watchers.append(watcher)

        def unwatch():
            if watcher in self._watchers:
                self._watchers.remove(watcher)

        return unwatch

    def __repr__(self) -> str:
        return f"<{self.tag_name} {self.properties!r}>"
