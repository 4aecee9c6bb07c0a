import logging

import pytest

from flatenv.key_mapping.mapper import KeyMapper, is_index, join_path, split_path
from flatenv.key_mapping.nested import reconstruct_nested, unflatten


def test_join_and_split_path() -> None:
    assert join_path(["user", "tags", "0"]) == "user__tags__0"
    assert split_path("user__tags__0") == ("user", "tags", "0")
    assert split_path("plain") == ("plain",)
    assert join_path([]) == ""


def test_split_path_does_not_escape_separator() -> None:
    assert split_path(join_path(["a__b", "c"])) == ("a", "b", "c")


@pytest.mark.parametrize(
    ("segment", "expected"),
    [("0", True), ("12", True), ("007", True), ("-1", False), ("+1", False), ("", False), ("1a", False), ("²", False)],
)
def test_is_index(segment: str, expected: bool) -> None:  # noqa: FBT001
    assert is_index(segment) is expected


def test_key_mapper_full_key_and_relative_key() -> None:
    mapper = KeyMapper(prefix="meta_")
    assert mapper.full_key("mac__value") == "meta_mac__value"
    assert mapper.matches("meta_mac__value")
    assert not mapper.matches("FOO")
    assert mapper.relative_key("meta_mac__value") == "mac__value"


def test_key_mapper_rejects_invalid_inputs() -> None:
    with pytest.raises(ValueError, match="prefix must not be empty"):
        _ = KeyMapper(prefix="")
    with pytest.raises(ValueError, match="prefix must not contain separator"):
        _ = KeyMapper(prefix="meta__")

    mapper = KeyMapper(prefix="meta_")
    with pytest.raises(ValueError, match="key does not match prefix"):
        _ = mapper.relative_key("other_key")
    assert mapper.relative_key("meta_") == ""


def test_unflatten_concrete_scenario() -> None:
    flat = {"user__name": '"ann"', "user__tags__0": '"x"', "user__tags__1": '"y"'}
    assert unflatten(flat) == {"user": {"name": "ann", "tags": ["x", "y"]}}


def test_unflatten_list_of_maps() -> None:
    flat = {"key_groups__0__pgp__0__fp": '"AB"', "key_groups__0__pgp__1__fp": '"CD"', "key_groups__1__kms": '"arn"'}
    assert unflatten(flat) == {"key_groups": [{"pgp": [{"fp": "AB"}, {"fp": "CD"}]}, {"kms": "arn"}]}


def test_unflatten_nested_lists() -> None:
    flat = {"m__0__0": 1, "m__0__1": 2, "m__1__0": 3}
    assert unflatten(flat) == {"m": [[1, 2], [3]]}


def test_unflatten_grows_list_with_none_placeholders() -> None:
    assert unflatten({"a__3": '"d"', "a__1": '"b"'}) == {"a": [None, "b", None, "d"]}


def test_unflatten_leaves_non_string_scalars_alone() -> None:
    assert unflatten({"n": 3, "b": True, "z": None, "s": "raw"}) == {"n": 3, "b": True, "z": None, "s": "raw"}


def test_unflatten_numeric_map_keys_become_lists() -> None:
    # Map keys that look like indices cannot be told apart once flattened.
    assert unflatten({"codes__0": '"x"', "codes__2": '"y"'}) == {"codes": ["x", None, "y"]}


def test_unflatten_first_segment_is_always_a_map_key() -> None:
    assert unflatten({"0": '"zero"', "1__a": '"one"'}) == {"0": "zero", "1": {"a": "one"}}


def test_unflatten_empty_input() -> None:
    assert unflatten({}) == {}


def test_reconstruct_nested_rejects_empty_path() -> None:
    with pytest.raises(ValueError, match="key path must not be empty"):
        _ = reconstruct_nested([((), "value")])


def test_reconstruct_nested_keeps_container_over_scalar(caplog: pytest.LogCaptureFixture) -> None:
    scalar_first = [(("a",), 1), (("a", "b"), 2)]
    container_first = list(reversed(scalar_first))

    with caplog.at_level(logging.WARNING, logger="flatenv.key_mapping.nested"):
        assert reconstruct_nested(scalar_first) == {"a": {"b": 2}}
        assert reconstruct_nested(container_first) == {"a": {"b": 2}}

    assert len(caplog.records) == 2  # noqa: PLR2004


def test_reconstruct_nested_replaces_map_with_list_on_index_segment(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="flatenv.key_mapping.nested"):
        result = reconstruct_nested([(("a", "x"), 1), (("a", "0"), 2)])

    assert result == {"a": [2]}
    assert "replacing {'x': 1} with a list at a" in caplog.text


def test_reconstruct_nested_warning_names_the_replaced_slot(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="flatenv.key_mapping.nested"):
        result = reconstruct_nested([(("a", "b", "c", "x"), 1), (("a", "b", "c", "0"), 2)])

    assert result == {"a": {"b": {"c": [2]}}}
    assert "replacing {'x': 1} with a list at a__b__c" in caplog.text
