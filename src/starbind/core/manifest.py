"""
Model introspection.

Walks a pydantic model once, at registration, and compiles everything the
adapter needs at dispatch time into a read-only ``BindingManifest``: which
fields bind and under which alias, which of them have their own change
handler, and which methods are exported to the host with what arity.
"""

import copy
import inspect
import logging
import typing
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional

from pydantic import BaseModel

from ..config import get_config
from ..exceptions import ArityError
from .tags import Directive, field_tag, is_ignored_type, parse_tag

logger = logging.getLogger(__name__)

# host callbacks a field observer must not shadow
RESERVED_OBSERVERS = frozenset({"attributeChanged"})


@dataclass(frozen=True)
class FieldBinding:
    directive: Directive
    has_custom_handler: bool

    @property
    def name(self) -> str:
        return self.directive.name

    @property
    def alias(self) -> str:
        return self.directive.alias

    @property
    def handler(self) -> str:
        return self.directive.handler


@dataclass(frozen=True)
class ExportedMethod:
    """An ``on_*`` method callable from the host side."""
    name: str
    arity: Optional[int]  # None when the method takes *args
    required: int

    def select_args(self, args: tuple) -> tuple:
        """Trim host arguments to this method's positional arity."""
        if len(args) < self.required:
            raise ArityError(self.name, self.required, len(args))
        if self.arity is None:
            return args
        return args[:self.arity]


@dataclass(frozen=True)
class BindingManifest:
    model: type
    fields: Mapping[str, FieldBinding]
    change_handlers: FrozenSet[str]
    exported_methods: Mapping[str, ExportedMethod]
    defaults: Mapping[str, Any]

    def default_values(self) -> Dict[str, Any]:
        """Fresh copies of the registration defaults, keyed by field name."""
        return {name: copy.deepcopy(value) for name, value in self.defaults.items()}


def build_manifest(template: BaseModel) -> BindingManifest:
    """Compile the binding manifest for ``template``'s model class."""
    model_cls = type(template)
    fields: Dict[str, FieldBinding] = {}
    defaults: Dict[str, Any] = {}
    handlers = set()
    aliases: Dict[str, str] = {}

    for name, field_info in model_cls.model_fields.items():
        if is_ignored_type(field_info.annotation):
            continue

        directive, included = parse_tag(name, field_tag(field_info))
        if not included:
            continue

        if directive.alias in aliases:
            logger.warning(
                "%s: fields %s and %s share alias %r; %s wins",
                model_cls.__name__, aliases[directive.alias], name, directive.alias, name,
            )
        aliases[directive.alias] = name

        if directive.alias + "Changed" in RESERVED_OBSERVERS:
            logger.warning(
                "%s: alias %r of field %s produces the host callback %sChanged; "
                "its change notifications will not reach the field",
                model_cls.__name__, directive.alias, name, directive.alias,
            )

        custom = callable(getattr(model_cls, directive.handler, None))
        if custom:
            handlers.add(directive.handler)

        fields[name] = FieldBinding(directive, custom)
        defaults[name] = copy.deepcopy(getattr(template, name))

    manifest = BindingManifest(
        model=model_cls,
        fields=MappingProxyType(fields),
        change_handlers=frozenset(handlers),
        exported_methods=MappingProxyType(_exported_methods(model_cls)),
        defaults=MappingProxyType(defaults),
    )
    logger.debug(
        "Built manifest for %s: %d field(s), %d handler(s), %d export(s)",
        model_cls.__name__, len(manifest.fields), len(manifest.change_handlers),
        len(manifest.exported_methods),
    )
    return manifest


def _exported_methods(model_cls: type) -> Dict[str, ExportedMethod]:
    prefix = get_config().binding.export_prefix
    exports = {}
    # walk class dicts directly; getattr on a pydantic class trips deprecated descriptors
    for klass in reversed(model_cls.__mro__):
        for name, func in vars(klass).items():
            if not inspect.isfunction(func) or not name.startswith(prefix):
                continue
            if _result_count(func) > 1 or _needs_keywords(func):
                exports.pop(name, None)
                continue
            exports[name] = _describe(name, func)
    return exports


def _describe(name: str, func) -> ExportedMethod:
    params = list(inspect.signature(func).parameters.values())[1:]  # skip self
    positional = [
        p for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    variadic = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
    required = sum(1 for p in positional if p.default is inspect.Parameter.empty)
    return ExportedMethod(name, None if variadic else len(positional), required)


def _needs_keywords(func) -> bool:
    """Hosts pass positional arguments only, so required keyword-only parameters can't be met."""
    for param in inspect.signature(func).parameters.values():
        if param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is inspect.Parameter.empty:
            logger.debug("Not exporting %s: keyword-only parameter %s has no default",
                         func.__qualname__, param.name)
            return True
    return False


def _result_count(func) -> int:
    """Number of results a method declares: a ``tuple[A, B]`` return counts as two."""
    try:
        returns = typing.get_type_hints(func).get("return")
    except (NameError, TypeError):
        # unresolvable forward references: treat as a single result
        return 1
    if typing.get_origin(returns) is tuple:
        args = typing.get_args(returns)
        if args and args[-1] is not Ellipsis:
            return len(args)
    return 1
