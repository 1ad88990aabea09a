from __future__ import annotations

import pytest

from i18n_sheet.models.value_tree import (
    Mapping,
    Placeholder,
    Scalar,
    Sequence,
    display,
    from_plain,
    to_plain,
)


def test_from_plain_builds_tagged_nodes():
    tree = from_plain({"a": "x", "b": [1, None], "c": {"d": False}})
    assert tree == Mapping(
        {
            "a": Scalar("x"),
            "b": Sequence((Scalar(1), Scalar(None))),
            "c": Mapping({"d": Scalar(False)}),
        }
    )


def test_to_plain_round_trip_preserves_order():
    data = {"z": "1", "a": {"y": [1, "two"], "b": None}}
    plain = to_plain(from_plain(data))
    assert plain == data
    assert list(plain.keys()) == ["z", "a"]


def test_placeholder_display_and_plain():
    node = Placeholder("call_expression")
    assert display(node) == "[call_expression]"
    assert to_plain(node) == "[call_expression]"


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (10, "10"),
        (10.0, "10"),
        (0.25, "0.25"),
        (-1.5e-7, "-1.5e-7"),
        (1.5e-5, "0.000015"),
        (1e-6, "0.000001"),
        (2.5e22, "2.5e+22"),
        ("text", "text"),
    ],
)
def test_display_scalar(value, expected):
    assert display(Scalar(value)) == expected


def test_display_sequence_with_mapping_element():
    node = Sequence((Scalar("a"), Mapping({"k": Scalar("v")})))
    assert display(node) == 'a,{"k":"v"}'


def test_from_plain_rejects_unknown_types():
    with pytest.raises(TypeError):
        from_plain({"a": object()})
