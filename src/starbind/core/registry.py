"""
Component registry.

Registration compiles a model into a prototype once and defines it on the
host runtime under an element name. Registrations are permanent for the
life of the process and must happen before the host creates the first
element of that name.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pydantic import BaseModel

from ..exceptions import RegistrationError
from ..host.element import Prototype
from ..host.runtime import HostRuntime
from .builder import build_prototype
from .capabilities import CapabilitySet, classify
from .lifecycle import make_constructor
from .manifest import BindingManifest, build_manifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    name: str
    manifest: BindingManifest
    capabilities: CapabilitySet
    prototype: Prototype

    @property
    def model(self) -> type:
        return self.manifest.model


class ComponentRegistry:
    """Registered component models keyed by element name."""

    def __init__(self, runtime: Optional[HostRuntime] = None):
        self.runtime = runtime or HostRuntime()
        self._registrations: Dict[str, Registration] = {}

    def register(self, name: str, template: BaseModel) -> Registration:
        """
        Register ``template``'s model under ``name``.

        Args:
            name: Element name the host creates instances by
            template: Model instance supplying field defaults; it is
                introspected only and never becomes a live instance

        Raises:
            RegistrationError: If the name is taken or the template is not a model
        """
        if not isinstance(template, BaseModel):
            raise RegistrationError(f"cannot register {type(template).__name__}: not a pydantic model")
        if name in self._registrations:
            raise RegistrationError(f"component '{name}' is already registered")

        manifest = build_manifest(template)
        capabilities = classify(type(template))
        prototype = build_prototype(manifest, capabilities, make_constructor(manifest, capabilities))

        self.runtime.define(name, prototype)
        registration = Registration(name, manifest, capabilities, prototype)
        self._registrations[name] = registration

        logger.debug("Registered %s as <%s> (%s)", type(template).__name__, name, capabilities)
        return registration

    def get(self, name: str) -> Registration:
        try:
            return self._registrations[name]
        except KeyError:
            raise RegistrationError(f"component '{name}' is not registered") from None

    def names(self) -> List[str]:
        return list(self._registrations)

    def __contains__(self, name: str) -> bool:
        return name in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)


# Process-wide registry
component_registry = ComponentRegistry()


def register(name: str, template: BaseModel) -> Registration:
    return component_registry.register(name, template)
