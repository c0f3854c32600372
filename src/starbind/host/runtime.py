"""
Reference host runtime.

A small, single-threaded stand-in for the dynamic component runtime a
StarBind model is exposed to. It owns element definitions, creates
elements from prototypes, drives their lifecycle callbacks, and offers
the handful of services components reach through ``HostBase``: events,
timers, debouncers and resource imports. Timers run on the current
asyncio loop.
"""

import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..exceptions import HostError
from .element import Element, Prototype

logger = logging.getLogger(__name__)

Loader = Callable[[str], Any]


@dataclass
class HostEvent:
    type: str
    detail: Any
    target: Element
    bubbles: bool = True
    cancelable: bool = False
    default_prevented: bool = False

    def prevent_default(self):
        if self.cancelable:
            self.default_prevented = True


class HostRuntime:
    """Element definitions plus the services elements may call."""

    def __init__(self, loader: Optional[Loader] = None):
        self.loader = loader
        self._definitions: Dict[str, Prototype] = {}
        self._services: Dict[str, Callable[..., Any]] = {
            "fire": self._fire,
            "listen": self._listen,
            "async": self._async,
            "cancelAsync": self._cancel_async,
            "debounce": self._debounce,
            "cancelDebouncer": self._cancel_debouncer,
            "flushDebouncer": self._flush_debouncer,
            "isDebouncerActive": self._is_debouncer_active,
            "importHref": self._import_href,
        }

    # Definitions and lifecycle

    def define(self, tag_name: str, prototype: Prototype) -> None:
        if tag_name in self._definitions:
            raise HostError(f"element <{tag_name}> is already defined")
        self._definitions[tag_name] = prototype
        logger.debug("Defined <%s> with %d method(s)", tag_name, len(prototype.methods))

    def is_defined(self, tag_name: str) -> bool:
        return tag_name in self._definitions

    def create(self, tag_name: str) -> Element:
        prototype = self._definitions.get(tag_name)
        if prototype is None:
            raise HostError(f"element <{tag_name}> is not defined")

        element = Element(tag_name, prototype, self)
        for name, value in prototype.properties.items():
            element.set(name, copy.deepcopy(value))

        self._hook(element, "created")
        self._hook(element, "ready")
        return element

    def attach(self, element: Element) -> None:
        element.is_attached = True
        self._hook(element, "attached")
        self._hook(element, "domReady")

    def detach(self, element: Element) -> None:
        element.is_attached = False
        for handle, _ in element._debouncers.values():
            handle.cancel()
        element._debouncers.clear()
        self._hook(element, "detached")

    def set_attribute(self, element: Element, name: str, value: Any) -> None:
        old = element.attributes.get(name)
        element.attributes[name] = value
        self._hook(element, "attributeChanged", name, old, value)

    def service(self, name: str) -> Optional[Callable[..., Any]]:
        return self._services.get(name)

    def _hook(self, element: Element, name: str, *args: Any) -> None:
        if name in element.prototype.methods:
            element.call(name, *args)

    # Events

    def _fire(self, element: Element, event_type: str, detail: Any = None,
              options: Optional[Dict[str, Any]] = None) -> HostEvent:
        options = options or {}
        target = options.get("node") or element
        event = HostEvent(
            type=event_type,
            detail=detail,
            target=target,
            bubbles=options.get("bubble", True),
            cancelable=options.get("cancelable", False),
        )
        for listener in list(target._listeners.get(event_type, [])):
            listener(event)
        return event

    def _listen(self, element: Element, event_type: str, listener: Callable[[HostEvent], None]) -> None:
        element._listeners.setdefault(event_type, []).append(listener)

    # Timers

    def _loop(self) -> asyncio.AbstractEventLoop:
        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise HostError("host timers require a running event loop") from exc

    def _async(self, element: Element, fn: Callable[[], Any], wait_ms: int = 0) -> asyncio.Handle:
        loop = self._loop()
        if wait_ms:
            return loop.call_later(wait_ms / 1000, fn)
        return loop.call_soon(fn)

    def _cancel_async(self, element: Element, handle: asyncio.Handle) -> None:
        handle.cancel()

    def _debounce(self, element: Element, job_name: str, fn: Callable[[], Any], wait_ms: int = 0) -> None:
        self._cancel_debouncer(element, job_name)

        def run():
            element._debouncers.pop(job_name, None)
            fn()

        handle = self._loop().call_later(wait_ms / 1000, run)
        element._debouncers[job_name] = (handle, fn)

    def _cancel_debouncer(self, element: Element, job_name: str) -> None:
        job = element._debouncers.pop(job_name, None)
        if job is not None:
            job[0].cancel()

    def _flush_debouncer(self, element: Element, job_name: str) -> None:
        job = element._debouncers.pop(job_name, None)
        if job is not None:
            handle, fn = job
            handle.cancel()
            fn()

    def _is_debouncer_active(self, element: Element, job_name: str) -> bool:
        return job_name in element._debouncers

    # Imports

    def _import_href(self, element: Element, url: str,
                     on_load: Callable[[Any], None], on_error: Callable[[Exception], None]) -> None:
        if self.loader is None:
            on_error(HostError(f"no resource loader configured for {url}"))
            return
        try:
            document = self.loader(url)
        except Exception as exc:
            logger.debug("Import of %s failed: %s", url, exc)
            on_error(exc)
            return
        on_load(document)
