from datetime import datetime, timezone

from fluentcfg.resource import (
    FLUENTBIT_FINALIZER_NAME,
    GROUP_VERSION,
    FluentBit,
    GroupVersion,
    KeyValues,
    ObjectMeta,
)


def test_group_version_string():
    built = GroupVersion(group="fluentbit.fluent.io", version="v1alpha2")
    assert str(built) == "fluentbit.fluent.io/v1alpha2"
    assert str(built) == str(GROUP_VERSION)


def test_group_version_without_group_is_version():
    assert str(GroupVersion(group="", version="v1")) == "v1"


def test_default_finalizer_is_group_name():
    fb = FluentBit()
    fb.add_finalizer(FLUENTBIT_FINALIZER_NAME)
    assert fb.metadata.finalizers == ["fluentbit.fluent.io"]
    assert fb.has_finalizer("fluentbit.fluent.io") is True


def test_key_values_render_in_insertion_order():
    kvs = KeyValues()
    kvs.insert("Name", "tail")
    kvs.insert("Tag", "logs.foo.bar")
    assert str(kvs) == "    Name    tail\n    Tag    logs.foo.bar\n"


def test_key_values_allow_repeated_keys():
    kvs = KeyValues()
    kvs.insert("Condition", "Key_value_equals    kve0    kvev0")
    kvs.insert("Condition", "Key_value_equals    kve1    kvev1")
    assert len(kvs) == 2
    assert str(kvs) == (
        "    Condition    Key_value_equals    kve0    kvev0\n"
        "    Condition    Key_value_equals    kve1    kvev1\n"
    )


def test_key_values_empty_renders_empty():
    assert str(KeyValues()) == ""
    assert len(KeyValues()) == 0


def test_key_values_merge_appends():
    first = KeyValues([("a", "1")])
    second = KeyValues([("b", "2"), ("c", "3")])
    first.merge(second)
    assert list(first) == [("a", "1"), ("b", "2"), ("c", "3")]
    assert first == KeyValues([("a", "1"), ("b", "2"), ("c", "3")])


def test_key_values_convert_values_to_strings():
    kvs = KeyValues()
    kvs.insert("Rate", 200)
    assert list(kvs) == [("Rate", "200")]


def test_fluentbit_default_type_meta():
    fb = FluentBit()
    assert fb.type_meta.api_version == "fluentbit.fluent.io/v1alpha2"
    assert fb.type_meta.kind == "FluentBit"


def test_finalizer_add_and_has():
    fb = FluentBit(metadata=ObjectMeta(name="fluent-bit"))
    assert fb.has_finalizer(FLUENTBIT_FINALIZER_NAME) is False
    fb.add_finalizer(FLUENTBIT_FINALIZER_NAME)
    assert fb.has_finalizer(FLUENTBIT_FINALIZER_NAME) is True
    assert fb.metadata.finalizers == [FLUENTBIT_FINALIZER_NAME]


def test_remove_finalizer_removes_all_occurrences():
    fb = FluentBit(metadata=ObjectMeta(finalizers=["x", "keep", "x"]))
    fb.remove_finalizer("x")
    assert fb.metadata.finalizers == ["keep"]
    assert fb.has_finalizer("x") is False


def test_remove_missing_finalizer_keeps_list():
    fb = FluentBit(metadata=ObjectMeta(finalizers=["keep"]))
    fb.remove_finalizer("absent")
    assert fb.metadata.finalizers == ["keep"]


def test_is_being_deleted():
    fb = FluentBit()
    assert fb.is_being_deleted() is False
    fb.metadata.deletion_timestamp = datetime(2022, 1, 1, tzinfo=timezone.utc)
    assert fb.is_being_deleted() is True


def test_instances_do_not_share_finalizers():
    first = FluentBit()
    second = FluentBit()
    first.add_finalizer("a")
    assert second.metadata.finalizers == []