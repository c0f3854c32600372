"""
StarBind - Typed Component Binding for Dynamic Hosts

Register a pydantic model as a host component and StarBind keeps every
host element and its model instance in sync: host property changes flow
into the model through generated dispatchers, model changes flow back to
the host over an update channel.
"""

from .config import StarBindConfig, configure_logging, get_config, set_config
from .core import (
    BasicComponent, Bind, BindingManifest, CapabilitySet, ComponentRegistry,
    Directive, EventOptions, HostBase, IGNORED_TAG_TYPES, ImportResult,
    LifecycleAdapter, LivePairing, PairingState, Registration, UpdateChannel,
    UpdateableAdapter, build_manifest, classify, component_registry, ignore_type, is_ignored_type,
    pairing_of, parse_tag, register,
)
from .exceptions import (
    ArityError, BindingError, ChannelClosedError, HostError,
    RegistrationError, StarBindError, StructuralMismatchError,
)
from .host import Element, HostEvent, HostRuntime, Prototype

__all__ = [
    # Registration
    'register',
    'component_registry',
    'ComponentRegistry',
    'Registration',

    # Model building blocks
    'Bind',
    'BasicComponent',
    'HostBase',
    'UpdateableAdapter',
    'LifecycleAdapter',
    'EventOptions',
    'ImportResult',

    # Binding engine
    'Directive',
    'parse_tag',
    'IGNORED_TAG_TYPES',
    'ignore_type',
    'is_ignored_type',
    'BindingManifest',
    'build_manifest',
    'CapabilitySet',
    'classify',
    'LivePairing',
    'PairingState',
    'pairing_of',
    'UpdateChannel',

    # Host
    'HostRuntime',
    'Element',
    'Prototype',
    'HostEvent',

    # Configuration
    'StarBindConfig',
    'get_config',
    'set_config',
    'configure_logging',

    # Errors
    'StarBindError',
    'BindingError',
    'RegistrationError',
    'StructuralMismatchError',
    'ArityError',
    'ChannelClosedError',
    'HostError',
]
