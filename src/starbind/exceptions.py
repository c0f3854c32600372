"""
StarBind exception hierarchy.

Tag problems never raise: they are tolerated and the field keeps its
defaults. Everything else surfaces through one of these classes.
"""


class StarBindError(Exception):
    """Base class for all StarBind errors."""


class BindingError(StarBindError):
    """A component is used in a way its binding does not support."""


class RegistrationError(StarBindError):
    """A component model could not be registered."""


class StructuralMismatchError(BindingError):
    """The manifest references a field or method the instance does not have."""

    def __init__(self, model: type, member: str, kind: str = "field"):
        self.model = model
        self.member = member
        self.kind = kind
        super().__init__(f"{model.__name__} has no {kind} '{member}'")


class ArityError(BindingError, TypeError):
    """An exported method was called with fewer arguments than it requires."""

    def __init__(self, method: str, required: int, received: int):
        self.method = method
        self.required = required
        self.received = received
        super().__init__(
            f"{method}() requires {required} positional argument(s), got {received}"
        )


class ChannelClosedError(StarBindError):
    """Send attempted on a closed update channel."""


class HostError(StarBindError):
    """The host runtime rejected an operation."""
