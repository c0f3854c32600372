"""
Reusable component building blocks.

Mix these into a model to pick up capabilities without writing the
boilerplate: ``LifecycleAdapter`` for no-op lifecycle hooks,
``UpdateableAdapter`` for pushing changes to the host, ``HostBase`` for
access to the host element and its services. ``BasicComponent`` combines
the last two.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..exceptions import BindingError
from ..host.element import Element
from ..host.runtime import HostEvent
from .channel import UpdateChannel
from .tags import ignore_type


class LifecycleAdapter:
    def created(self) -> None:
        pass

    def ready(self) -> None:
        pass

    def attached(self) -> None:
        pass

    def dom_ready(self) -> None:
        pass

    def detached(self) -> None:
        pass


class UpdateableAdapter(BaseModel):
    """Holds the update channel and signals it on demand."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    _update: Optional[UpdateChannel] = PrivateAttr(default=None)

    def register_component(self, update: UpdateChannel) -> None:
        self._update = update

    async def update_component(self) -> None:
        """Ask for every bound field to be copied to the host element."""
        if self._update is None:
            raise BindingError(f"{type(self).__name__} has no update channel; it is not live")
        await self._update.send()


@dataclass
class EventOptions:
    node: Optional[Element] = None
    no_bubble: bool = False
    cancelable: bool = False


@dataclass
class ImportResult:
    doc: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class HostBase(BaseModel):
    """Keeps the host element and forwards to the host's utility services."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    _this: Optional[Element] = PrivateAttr(default=None)

    def init_component(self, this: Element) -> None:
        self._this = this

    @property
    def element(self) -> Element:
        if self._this is None:
            raise BindingError(f"{type(self).__name__} is not attached to a host element")
        return self._this

    def fire(self, event_type: str, detail: Any = None, options: Optional[EventOptions] = None) -> HostEvent:
        options = options or EventOptions()
        return self.element.call("fire", event_type, detail, {
            "node": options.node,
            "bubble": not options.no_bubble,
            "cancelable": options.cancelable,
        })

    def fire_basic(self, event_type: str) -> HostEvent:
        return self.fire(event_type)

    def listen(self, event_type: str, listener: Callable[[HostEvent], None]) -> None:
        self.element.call("listen", event_type, listener)

    def async_(self, fn: Callable[[], Any], wait_ms: int = 0) -> asyncio.Handle:
        return self.element.call("async", fn, wait_ms)

    def cancel_async(self, handle: asyncio.Handle) -> None:
        self.element.call("cancelAsync", handle)

    def debounce(self, job_name: str, fn: Callable[[], Any], wait_ms: int = 0) -> None:
        self.element.call("debounce", job_name, fn, wait_ms)

    def cancel_debouncer(self, job_name: str) -> None:
        self.element.call("cancelDebouncer", job_name)

    def flush_debouncer(self, job_name: str) -> None:
        self.element.call("flushDebouncer", job_name)

    def is_debouncer_active(self, job_name: str) -> bool:
        return bool(self.element.call("isDebouncerActive", job_name))

    async def import_href(self, url: str) -> ImportResult:
        """Load a resource through the host. Failures come back in the result."""
        future = asyncio.get_running_loop().create_future()

        def resolve(result: ImportResult):
            if not future.done():
                future.set_result(result)

        self.element.call(
            "importHref", url,
            lambda doc: resolve(ImportResult(doc=doc)),
            lambda exc: resolve(ImportResult(error=exc)),
        )
        return await future


class BasicComponent(HostBase, UpdateableAdapter):
    """Host access plus update propagation."""


ignore_type(BasicComponent, HostBase, UpdateableAdapter, UpdateChannel, Element)
