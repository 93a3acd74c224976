"""Tests for the three-state nullable wrapper and the UNSET sentinel."""

import copy
import pickle

import pytest

from py_oas_generator.runtime.nullable import UNSET, Nullable, NullableState, coerce_nullable, is_unset


class TestUnset:
    def test_unset_is_falsy_singleton(self) -> None:
        assert not UNSET
        assert is_unset(UNSET)
        assert not is_unset(None)
        assert repr(UNSET) == "UNSET"

    def test_unset_survives_copy_and_pickle(self) -> None:
        assert copy.copy(UNSET) is UNSET
        assert copy.deepcopy({"value": UNSET})["value"] is UNSET
        assert pickle.loads(pickle.dumps(UNSET)) is UNSET


class TestNullable:
    def test_new_wrapper_is_unset(self) -> None:
        value: Nullable[str] = Nullable()

        assert value.state is NullableState.UNSET
        assert not value.is_set()
        assert value.get() is None
        assert value.get_ok() == (None, False)

    def test_set_nil_is_set_but_null(self) -> None:
        value: Nullable[str] = Nullable()
        value.set_nil()

        assert value.is_set()
        assert value.is_null()
        assert value.get_ok() == (None, True)

    def test_set_none_means_null(self) -> None:
        value: Nullable[int] = Nullable()
        value.set(None)

        assert value.state is NullableState.NULL

    def test_set_then_unset(self) -> None:
        value = Nullable("abc")
        assert value.get_ok() == ("abc", True)

        value.unset()

        assert value.state is NullableState.UNSET
        assert value.get() is None

    @pytest.mark.parametrize(
        ("payload", "expected_state", "expected_value"),
        [
            ({}, NullableState.UNSET, None),
            ({"prevIterator": None}, NullableState.NULL, None),
            ({"prevIterator": "iter_1"}, NullableState.VALUE, "iter_1"),
        ],
    )
    def test_from_payload_checks_presence(
        self, payload: dict, expected_state: NullableState, expected_value: str | None
    ) -> None:
        value: Nullable[str] = Nullable.from_payload(payload, "prevIterator")

        assert value.state is expected_state
        assert value.get() == expected_value

    def test_from_payload_decodes_values_only(self) -> None:
        calls: list[object] = []

        def decode(raw: object) -> object:
            calls.append(raw)
            return str(raw).upper()

        assert Nullable.from_payload({"k": "x"}, "k", decode).get() == "X"
        assert Nullable.from_payload({"k": None}, "k", decode).is_null()
        assert calls == ["x"]

    def test_emit_writes_null_and_omits_unset(self) -> None:
        payload: dict[str, object] = {}

        Nullable().emit(payload, "absent")
        Nullable.null().emit(payload, "explicit")
        Nullable(3).emit(payload, "value", lambda v: v * 2)

        assert payload == {"explicit": None, "value": 6}

    def test_equality_compares_state(self) -> None:
        assert Nullable.null() == Nullable(None)
        assert Nullable.null() != Nullable()
        assert Nullable("a") == Nullable("a")
        assert Nullable("a") != Nullable("b")
        assert repr(Nullable()) == "Nullable.UNSET"
        assert repr(Nullable.null()) == "Nullable.NULL"
        assert repr(Nullable("a")) == "Nullable('a')"


class TestCoerceNullable:
    def test_plain_values(self) -> None:
        assert coerce_nullable(UNSET).state is NullableState.UNSET
        assert coerce_nullable(None).state is NullableState.NULL
        assert coerce_nullable(5).get() == 5

    def test_wrapper_is_copied(self) -> None:
        original = Nullable("v")
        copied = coerce_nullable(original)

        original.set_nil()

        assert copied.get() == "v"
