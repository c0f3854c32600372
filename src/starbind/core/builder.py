"""
Prototype builder.

Turns a ``BindingManifest`` into the ``Prototype`` the host instantiates.
Every prototype method is a trampoline: it only knows the name of a
per-instance target (``__<name>``) that the lifecycle controller installs
on each element when it is constructed.
"""

from typing import Any, Callable

from ..host.element import Element, Prototype
from .capabilities import CapabilitySet
from .manifest import BindingManifest

LIFECYCLE_STAGES = ("ready", "attached", "domReady")


def make_callback(target: str, *bound: Any) -> Callable[..., Any]:
    """Trampoline calling ``this.<target>(*bound, *args)``."""
    def trampoline(this: Element, *args: Any) -> Any:
        return this.call(target, *bound, *args)

    trampoline.__name__ = target
    return trampoline


def make_detached(lifecycle: bool) -> Callable[[Element], None]:
    def detached(this: Element) -> None:
        if lifecycle:
            this.call("__detached")
        this.call("__teardown")

    return detached


def build_prototype(manifest: BindingManifest, capabilities: CapabilitySet,
                    constructor: Callable[[Element], Any]) -> Prototype:
    proto = Prototype()

    for name, binding in manifest.fields.items():
        proto.properties[binding.alias] = manifest.defaults[name]
        if binding.has_custom_handler:
            proto.methods[binding.alias + "Changed"] = make_callback("__" + binding.handler, name)
        else:
            proto.methods[binding.alias + "Changed"] = make_callback("__propertyChanged", name)

    for name in manifest.exported_methods:
        proto.methods[name] = make_callback("__" + name)

    proto.methods["created"] = constructor

    if capabilities.lifecycle:
        for stage in LIFECYCLE_STAGES:
            proto.methods[stage] = make_callback("__" + stage)
    proto.methods["detached"] = make_detached(capabilities.lifecycle)

    if capabilities.attribute_change:
        proto.methods["attributeChanged"] = make_callback("__attributeChanged")

    return proto
