"""
StarBind Core Module

The binding engine: tag parsing, capability detection, model
introspection, prototype construction and per-instance lifecycle.
"""

from .adapters import BasicComponent, EventOptions, HostBase, ImportResult, LifecycleAdapter, UpdateableAdapter
from .builder import build_prototype
from .capabilities import (
    AttributeListener, CapabilitySet, Component, LifecycleListener,
    PropertyListener, Updateable, classify,
)
from .channel import UpdateChannel
from .lifecycle import LivePairing, PairingState, make_constructor, pairing_of
from .manifest import BindingManifest, ExportedMethod, FieldBinding, build_manifest
from .registry import ComponentRegistry, Registration, component_registry, register
from .tags import IGNORED_TAG_TYPES, Bind, Directive, ignore_type, is_ignored_type, parse_tag

__all__ = [
    "Bind", "Directive", "parse_tag", "IGNORED_TAG_TYPES", "ignore_type", "is_ignored_type",
    "CapabilitySet", "classify", "Component", "Updateable", "LifecycleListener",
    "PropertyListener", "AttributeListener",
    "BindingManifest", "FieldBinding", "ExportedMethod", "build_manifest",
    "build_prototype",
    "LivePairing", "PairingState", "make_constructor", "pairing_of",
    "UpdateChannel",
    "LifecycleAdapter", "UpdateableAdapter", "HostBase", "BasicComponent",
    "EventOptions", "ImportResult",
    "ComponentRegistry", "Registration", "component_registry", "register",
]
