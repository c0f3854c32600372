"""
Instance lifecycle controller.

Each host element created from a StarBind prototype gets one
``LivePairing``: a fresh model instance plus the wiring that keeps it and
the element consistent. Host-side writes reach the model through the
dispatch targets installed by ``wire``; model-side writes reach the host
through full resyncs triggered over the update channel.
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel

from ..exceptions import BindingError, StructuralMismatchError
from ..host.element import Element
from .capabilities import CapabilitySet
from .channel import UpdateChannel
from .manifest import BindingManifest, ExportedMethod

logger = logging.getLogger(__name__)

LIFECYCLE_TARGETS = {
    "__created": "created",
    "__ready": "ready",
    "__attached": "attached",
    "__domReady": "dom_ready",
    "__detached": "detached",
}


class PairingState(Enum):
    UNCONSTRUCTED = "unconstructed"
    CONSTRUCTED = "constructed"
    WIRED = "wired"
    LIVE = "live"
    DETACHED = "detached"


class LivePairing:
    """One model instance bound to one host element."""

    def __init__(self, manifest: BindingManifest, capabilities: CapabilitySet, element: Element):
        self.manifest = manifest
        self.capabilities = capabilities
        self.element = element
        self.state = PairingState.UNCONSTRUCTED
        self.instance: Optional[BaseModel] = None
        self.channel: Optional[UpdateChannel] = None
        self.resync_count = 0
        self.resync_errors = 0
        self._task: Optional[asyncio.Task] = None

    def construct(self) -> BaseModel:
        self._expect(PairingState.UNCONSTRUCTED)
        self.instance = self.manifest.model.model_construct(**self.manifest.default_values())
        self.state = PairingState.CONSTRUCTED
        return self.instance

    def wire(self) -> None:
        self._expect(PairingState.CONSTRUCTED)
        this = self.element
        instance = self.instance

        # specific property change handlers
        for name, binding in self.manifest.fields.items():
            if binding.has_custom_handler:
                this.set("__" + binding.handler, self._custom_dispatcher(getattr(instance, binding.handler)))

        this.set("__propertyChanged", self._generic_dispatcher())

        for name, export in self.manifest.exported_methods.items():
            this.set("__" + name, self._export_target(export))

        if self.capabilities.attribute_change:
            this.set("__attributeChanged", instance.attribute_changed)

        if self.capabilities.lifecycle:
            for target, hook in LIFECYCLE_TARGETS.items():
                this.set(target, getattr(instance, hook))

        this.set("__teardown", self.detach)
        self.state = PairingState.WIRED

    def go_live(self) -> None:
        self._expect(PairingState.WIRED)

        if self.capabilities.updateable:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as exc:
                raise BindingError(
                    f"{self.manifest.model.__name__} propagates updates and needs a running event loop"
                ) from exc
            self.channel = UpdateChannel()
            self._task = loop.create_task(self._pump(), name=f"starbind-sync-{self.element.tag_name}")
            self.instance.register_component(self.channel)

        if self.capabilities.component:
            self.instance.init_component(self.element)

        self.state = PairingState.LIVE
        logger.debug("<%s> is live", self.element.tag_name)

    def resync(self) -> None:
        """Copy every bound field from the model to the element."""
        for name, binding in self.manifest.fields.items():
            self.element.set(binding.alias, self._read(name))
        self.resync_count += 1

    def detach(self) -> None:
        if self.state is PairingState.DETACHED:
            return
        if self.channel is not None:
            self.channel.close()
        self.state = PairingState.DETACHED
        logger.debug("<%s> detached", self.element.tag_name)

    async def wait_closed(self) -> None:
        """Wait for the resync task to finish after ``detach``."""
        if self._task is not None:
            await self._task

    async def _pump(self) -> None:
        try:
            while await self.channel.receive():
                try:
                    self.resync()
                except Exception:
                    # keep receiving after a failed pass
                    self.resync_errors += 1
                    logger.exception("Resync of <%s> failed", self.element.tag_name)
        finally:
            self.channel.close()

    def _read(self, name: str) -> Any:
        try:
            return getattr(self.instance, name)
        except AttributeError:
            raise StructuralMismatchError(type(self.instance), name) from None

    def _write(self, name: str, value: Any) -> None:
        if name not in type(self.instance).model_fields:
            raise StructuralMismatchError(type(self.instance), name)
        setattr(self.instance, name, value)

    def _custom_dispatcher(self, handler: Callable[[Any, Any], Any]) -> Callable[[str, Any, Any], Any]:
        def dispatch(field_name: str, old_value: Any, new_value: Any) -> Any:
            self._write(field_name, new_value)
            return handler(old_value, new_value)

        return dispatch

    def _generic_dispatcher(self) -> Callable[[str, Any, Any], Any]:
        notify = self.instance.property_changed if self.capabilities.property_change else None

        def dispatch(field_name: str, old_value: Any, new_value: Any) -> Any:
            self._write(field_name, new_value)
            if notify is not None:
                return notify(field_name, old_value, new_value)

        return dispatch

    def _export_target(self, export: ExportedMethod) -> Callable[..., Any]:
        method = getattr(self.instance, export.name, None)
        if method is None:
            raise StructuralMismatchError(type(self.instance), export.name, kind="method")

        if not inspect.iscoroutinefunction(method):
            def call(*args: Any) -> Any:
                return method(*export.select_args(args))

            return call

        def schedule(*args: Any) -> asyncio.Task:
            """Run a coroutine export on the loop; the host gets the task."""
            selected = export.select_args(args)
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                raise BindingError(f"{export.name} is a coroutine and needs a running event loop") from None
            return loop.create_task(method(*selected), name=f"starbind-{export.name}")

        return schedule

    def _expect(self, state: PairingState) -> None:
        if self.state is not state:
            raise BindingError(f"pairing is {self.state.value}, expected {state.value}")

    def __repr__(self) -> str:
        return f"LivePairing({self.manifest.model.__name__}, <{self.element.tag_name}>, {self.state.value})"


def make_constructor(manifest: BindingManifest, capabilities: CapabilitySet) -> Callable[[Element], None]:
    """Build the ``created`` trampoline the host calls for every new element."""
    def created(this: Element) -> None:
        pairing = LivePairing(manifest, capabilities, this)
        pairing.construct()
        pairing.wire()
        pairing.go_live()
        this.set("__pairing", pairing)

        if capabilities.lifecycle:
            this.call("__created")

    return created


def pairing_of(element: Element) -> LivePairing:
    pairing = element.get("__pairing")
    if pairing is None:
        raise BindingError(f"<{element.tag_name}> is not bound to a model")
    return pairing
