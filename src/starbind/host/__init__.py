"""
Host runtime boundary.

The dynamic object system StarBind models are exposed to. Only its shape
matters to the binding engine; this package is a small in-process
implementation of that shape.
"""

from .element import Element, Prototype
from .runtime import HostEvent, HostRuntime

__all__ = ["Element", "Prototype", "HostEvent", "HostRuntime"]
