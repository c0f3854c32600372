"""
Tests for prototype construction.
"""

from typing import Annotated
from unittest.mock import Mock

from pydantic import BaseModel

from starbind import Bind, LifecycleAdapter, build_manifest, classify
from starbind.core.builder import build_prototype, make_callback


class Panel(BaseModel):
    width: Annotated[int, Bind("w")] = 100
    label: str = "panel"

    def width_changed(self, old, new):
        pass

    def on_resize(self, width):
        pass


class LivePanel(LifecycleAdapter, Panel):
    def attribute_changed(self, name, old, new):
        pass


def constructor(this):
    pass


def build(model):
    manifest = build_manifest(model)
    return build_prototype(manifest, classify(type(model)), constructor)


def test_properties_are_seeded_by_alias():
    proto = build(Panel(width=42))

    assert proto.properties == {"w": 42, "label": "panel"}


def test_change_trampolines_route_to_custom_or_generic_target():
    proto = build(Panel())
    this = Mock()

    proto.methods["wChanged"](this, 1, 2)
    this.call.assert_called_once_with("__width_changed", "width", 1, 2)

    this.reset_mock()
    proto.methods["labelChanged"](this, "a", "b")
    this.call.assert_called_once_with("__propertyChanged", "label", "a", "b")


def test_exported_method_trampoline_forwards_all_arguments():
    proto = build(Panel())
    this = Mock()

    proto.methods["on_resize"](this, 10, 20, 30)

    this.call.assert_called_once_with("__on_resize", 10, 20, 30)


def test_constructor_is_installed_as_created():
    assert build(Panel()).methods["created"] is constructor


def test_lifecycle_and_attribute_trampolines_are_conditional():
    plain = build(Panel())
    assert "ready" not in plain.methods
    assert "attached" not in plain.methods
    assert "domReady" not in plain.methods
    assert "attributeChanged" not in plain.methods

    live = build(LivePanel())
    for stage in ("ready", "attached", "domReady", "detached", "attributeChanged"):
        assert stage in live.methods


def test_detached_always_tears_down():
    this = Mock()
    build(Panel()).methods["detached"](this)
    this.call.assert_called_once_with("__teardown")

    this = Mock()
    build(LivePanel()).methods["detached"](this)
    assert [c.args for c in this.call.call_args_list] == [("__detached",), ("__teardown",)]


def test_make_callback_prepends_bound_arguments():
    this = Mock()
    this.call.return_value = "result"

    assert make_callback("__target", "a")(this, "b") == "result"
    this.call.assert_called_once_with("__target", "a", "b")
