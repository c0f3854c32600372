"""
Tests for structural capability detection.
"""

from pydantic import BaseModel

from starbind import BasicComponent, HostBase, LifecycleAdapter, UpdateableAdapter, classify


class Plain(BaseModel):
    value: int = 0


class Lifecycle(LifecycleAdapter, BaseModel):
    value: int = 0


class HalfLifecycle(BaseModel):
    def ready(self):
        pass

    def attached(self):
        pass


class Listening(BaseModel):
    def property_changed(self, field_name, old_value, new_value):
        pass

    def attribute_changed(self, attr_name, old_value, new_value):
        pass


def test_plain_model_has_no_capabilities():
    caps = classify(Plain)

    assert not any([caps.lifecycle, caps.property_change, caps.attribute_change,
                    caps.updateable, caps.component])


def test_lifecycle_requires_all_five_stages():
    assert classify(Lifecycle).lifecycle
    assert not classify(HalfLifecycle).lifecycle


def test_listeners_detected_by_shape():
    caps = classify(Listening)

    assert caps.property_change
    assert caps.attribute_change
    assert not caps.updateable


def test_adapters_grant_capabilities():
    assert classify(UpdateableAdapter).updateable
    assert classify(HostBase).component
    assert not classify(HostBase).updateable

    caps = classify(BasicComponent)
    assert caps.updateable
    assert caps.component
    assert not caps.lifecycle


def test_classification_is_cached_per_class():
    assert classify(Listening) is classify(Listening)
