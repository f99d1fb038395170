"""Tests for literal scalars and their canonical rendering."""

from __future__ import annotations

import pytest

from sheetcalc.formulas import Boolean, FormulaTypeError, Mul, Number, Sub, Text, to_literal


class TestNumber:
    def test_int_rendering(self) -> None:
        assert str(Number(5)) == "5"
        assert str(Number(-12)) == "-12"

    def test_integral_float_renders_without_fraction(self) -> None:
        assert str(Number(8.0)) == "8"

    def test_float_rendering(self) -> None:
        assert str(Number(0.25)) == "0.25"
        assert str(Number(1 / 3)) == "0.3333333333"

    def test_value_is_self(self) -> None:
        n = Number(3)
        assert n.value() is n

    def test_argument_text_equals_rendering(self) -> None:
        assert Number(2.5).argument_text() == "2.5"

    def test_rejects_bool(self) -> None:
        with pytest.raises(FormulaTypeError):
            Number(True)

    def test_rejects_text(self) -> None:
        with pytest.raises(FormulaTypeError):
            Number("5")

    def test_as_number(self) -> None:
        assert Number(4).as_number() == 4

    def test_as_text_fails(self) -> None:
        with pytest.raises(FormulaTypeError, match="Expected text"):
            Number(4).as_text()


class TestText:
    def test_rendering_is_raw(self) -> None:
        assert str(Text("hello")) == "hello"

    def test_as_text(self) -> None:
        assert Text("x").as_text() == "x"

    def test_as_number_fails(self) -> None:
        with pytest.raises(FormulaTypeError, match="Expected number"):
            Text("5").as_number()


class TestBoolean:
    def test_rendering(self) -> None:
        assert str(Boolean(True)) == "TRUE"
        assert str(Boolean(False)) == "FALSE"

    def test_as_bool(self) -> None:
        assert Boolean(False).as_bool() is False

    def test_rejects_int(self) -> None:
        with pytest.raises(FormulaTypeError):
            Boolean(1)


class TestEqualityAndImmutability:
    def test_equal_same_kind(self) -> None:
        assert Number(1) == Number(1)
        assert Number(1) == Number(1.0)
        assert hash(Number(1)) == hash(Number(1.0))

    def test_not_equal_across_kinds(self) -> None:
        assert Text("1") != Number(1)
        assert Boolean(True) != Number(1)

    def test_usable_as_dict_keys(self) -> None:
        d = {Number(1): "a", Text("1"): "b"}
        assert d[Number(1)] == "a"
        assert d[Text("1")] == "b"

    def test_nan_equals_itself(self) -> None:
        nan = Number(float("nan"))
        assert nan == Number(float("nan"))
        assert hash(nan) == hash(Number(float("nan")))
        assert nan != Number(0.0)
        assert {nan: "x"}[Number(float("nan"))] == "x"

    def test_overflowing_formula_is_stable(self) -> None:
        big = Mul(Number(1e308), Number(10))
        f = Sub(big, big)
        assert f.value() == f.value()

    def test_immutable(self) -> None:
        n = Number(1)
        with pytest.raises(AttributeError):
            n._raw = 2  # type: ignore[misc]

    def test_repr(self) -> None:
        assert repr(Text("a")) == "Text('a')"


class TestToLiteral:
    def test_coercions(self) -> None:
        assert to_literal(3) == Number(3)
        assert to_literal(2.5) == Number(2.5)
        assert to_literal("s") == Text("s")
        assert to_literal(True) == Boolean(True)

    def test_passes_literals_through(self) -> None:
        n = Number(1)
        assert to_literal(n) is n

    def test_rejects_unsupported(self) -> None:
        with pytest.raises(FormulaTypeError):
            to_literal([1, 2])
