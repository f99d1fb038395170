"""Tests for the Function / BinaryFunction evaluation and rendering contract."""

from __future__ import annotations

import threading

import pytest

from sheetcalc.formulas import (
    Add,
    BinaryFunction,
    Boolean,
    Div,
    Equal,
    FormulaConstructionError,
    FormulaRefError,
    FormulaTypeError,
    FormulaValueError,
    Function,
    Greater,
    Less,
    Literal,
    Mul,
    Number,
    Sub,
    Text,
    argument_text_of,
    parse_argument,
)
from sheetcalc.sheet import SheetSnapshot


# ────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────


class Larger(BinaryFunction):
    """Test-only binary function constructed with an explicit name."""

    def compute_value(self) -> Literal:
        return Number(max(self.left.value().as_number(), self.right.value().as_number()))


class CountingLiteral:
    """A content that records how often it is evaluated."""

    def __init__(self, n: int) -> None:
        self.calls = 0
        self._n = n

    def value(self) -> Literal:
        self.calls += 1
        return Number(self._n)

    def argument_text(self) -> str:
        return str(self._n)

    def __str__(self) -> str:
        return str(self._n)


class ForeignContent:
    """A content without ``argument_text``: only ``value`` and ``__str__``."""

    def value(self) -> Literal:
        return Number(7)

    def __str__(self) -> str:
        return "7=EXT(a=b)"


class FailingContent:
    def value(self) -> Literal:
        raise FormulaRefError("9;9")

    def argument_text(self) -> str:
        return "9;9"


# ────────────────────────────────────────────────────────────────
# Argument-parsing rule
# ────────────────────────────────────────────────────────────────


class TestParseArgument:
    def test_plain_value_unchanged(self) -> None:
        assert parse_argument("5") == "5"

    def test_reference_rendering(self) -> None:
        assert parse_argument("12=0;1") == "0;1"

    def test_function_rendering(self) -> None:
        assert parse_argument("5=ADD(2,3)") == "ADD(2,3)"

    def test_only_first_equals_is_a_boundary(self) -> None:
        assert parse_argument("1=EQ(a,b=c)") == "EQ(a,b=c)"

    def test_empty_after_equals(self) -> None:
        assert parse_argument("x=") == ""

    def test_argument_text_of_prefers_explicit_method(self) -> None:
        assert argument_text_of(Number(5)) == "5"
        assert argument_text_of(Add(Number(2), Number(3))) == "ADD(2,3)"

    def test_argument_text_of_falls_back_to_rendering(self) -> None:
        assert argument_text_of(ForeignContent()) == "EXT(a=b)"


# ────────────────────────────────────────────────────────────────
# Construction
# ────────────────────────────────────────────────────────────────


class TestConstruction:
    def test_name_from_registration(self) -> None:
        assert Add(Number(1), Number(2)).name == "ADD"

    def test_explicit_name(self) -> None:
        f = Larger(Number(1), Number(2), "LARGER")
        assert f.name == "LARGER"

    def test_explicit_name_overrides_registered(self) -> None:
        assert Add(Number(1), Number(2), "PLUS").name == "PLUS"

    def test_operands_are_an_ordered_pair(self) -> None:
        a, b = Number(1), Number(2)
        f = Sub(a, b)
        assert f.left is a
        assert f.right is b
        assert f.operands == (a, b)

    def test_none_left_operand_rejected(self) -> None:
        with pytest.raises(FormulaConstructionError, match="left"):
            Add(None, Number(1))

    def test_none_right_operand_rejected(self) -> None:
        with pytest.raises(FormulaConstructionError, match="right"):
            Add(Number(1), None)

    def test_non_content_operand_rejected(self) -> None:
        with pytest.raises(FormulaConstructionError):
            Add(5, Number(1))

    def test_missing_name_rejected(self) -> None:
        with pytest.raises(FormulaConstructionError, match="name"):
            Larger(Number(1), Number(2))

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(FormulaConstructionError):
            Larger(Number(1), Number(2), "")

    def test_function_is_a_content_operand(self) -> None:
        inner = Add(Number(2), Number(3))
        outer = Mul(inner, Number(10))
        assert outer.left is inner

    def test_base_function_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Function("RAW")

    def test_base_binary_function_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            BinaryFunction(Number(1), Number(2), "RAW")

    def test_numeric_base_requires_combine(self) -> None:
        from sheetcalc.formulas.fn_arithmetic import _NumericBinary

        class Unfinished(_NumericBinary):
            pass

        with pytest.raises(TypeError):
            Unfinished(Number(1), Number(2), "HALF")


# ────────────────────────────────────────────────────────────────
# Rendering
# ────────────────────────────────────────────────────────────────


class TestRendering:
    def test_literal_operands(self) -> None:
        assert str(Add(Number(5), Number(3))) == "8=ADD(5,3)"

    def test_literal_operands_general_shape(self) -> None:
        l1, l2 = Number(9), Number(4)
        f = Larger(l1, l2, "LARGER")
        assert str(f) == f"{f.compute_value()}=LARGER({l1},{l2})"

    def test_reference_operand_shows_address(self) -> None:
        sheet = SheetSnapshot(2, 2)
        sheet.set_content(0, 1, Number(12))
        ref = sheet.reference(0, 1)
        assert str(ref) == "12=0;1"
        assert str(Sub(ref, Number(4))) == "8=SUB(0;1,4)"

    def test_nested_function_shows_subexpression(self) -> None:
        inner = Add(Number(2), Number(3))
        assert str(inner) == "5=ADD(2,3)"
        outer = Mul(inner, Number(10))
        assert str(outer) == "50=MUL(ADD(2,3),10)"

    def test_deep_nesting(self) -> None:
        f = Add(Mul(Number(2), Sub(Number(5), Number(1))), Number(1))
        assert str(f) == "9=ADD(MUL(2,SUB(5,1)),1)"

    def test_argument_text_has_no_value_prefix(self) -> None:
        assert Add(Number(2), Number(3)).argument_text() == "ADD(2,3)"

    def test_foreign_operand_uses_first_equals_rule(self) -> None:
        f = Add(ForeignContent(), Number(1))
        assert str(f) == "8=ADD(EXT(a=b),1)"

    def test_text_operands(self) -> None:
        assert str(Equal(Text("a"), Text("a"))) == "TRUE=EQ(a,a)"

    def test_float_value_rendering(self) -> None:
        assert str(Div(Number(8), Number(2))) == "4=DIV(8,2)"
        assert str(Div(Number(1), Number(4))) == "0.25=DIV(1,4)"


# ────────────────────────────────────────────────────────────────
# Evaluation
# ────────────────────────────────────────────────────────────────


class TestEvaluation:
    def test_value_returns_literal(self) -> None:
        assert Add(Number(5), Number(3)).value() == Number(8)

    def test_value_is_idempotent(self) -> None:
        f = Mul(Add(Number(2), Number(3)), Number(10))
        assert f.value() == f.value() == Number(50)

    def test_value_reads_operands_each_call(self) -> None:
        counter = CountingLiteral(4)
        f = Add(counter, Number(1))
        f.value()
        f.value()
        assert counter.calls == 2

    def test_value_does_not_mutate_operands(self) -> None:
        left, right = Number(5), Number(3)
        f = Sub(left, right)
        f.value()
        assert f.left is left and left == Number(5)
        assert f.right is right and right == Number(3)

    def test_value_tracks_snapshot_state(self) -> None:
        sheet = SheetSnapshot(1, 2)
        sheet.set_content(0, 0, Number(1))
        f = Add(sheet.reference(0, 0), Number(1))
        assert f.value() == Number(2)
        sheet.set_content(0, 0, Number(10))
        assert f.value() == Number(11)

    def test_operand_failure_propagates_unchanged(self) -> None:
        f = Add(FailingContent(), Number(1))
        with pytest.raises(FormulaRefError) as exc_info:
            f.value()
        assert exc_info.value.address == "9;9"

    def test_operand_failure_propagates_from_str(self) -> None:
        with pytest.raises(FormulaRefError):
            str(Mul(Add(FailingContent(), Number(1)), Number(2)))

    def test_type_mismatch(self) -> None:
        with pytest.raises(FormulaTypeError):
            Add(Text("x"), Number(1)).value()

    def test_boolean_is_not_a_number(self) -> None:
        with pytest.raises(FormulaTypeError):
            Add(Boolean(True), Number(1)).value()

    def test_division_by_zero(self) -> None:
        with pytest.raises(FormulaValueError, match="Division by zero"):
            Div(Number(1), Number(0)).value()

    def test_int_arithmetic_stays_int(self) -> None:
        assert Mul(Number(3), Number(4)).value().raw == 12
        assert isinstance(Mul(Number(3), Number(4)).value().raw, int)

    def test_comparisons(self) -> None:
        assert Greater(Number(3), Number(2)).value() == Boolean(True)
        assert Less(Number(3), Number(2)).value() == Boolean(False)
        assert Equal(Number(2), Number(2)).value() == Boolean(True)
        assert Equal(Number(2), Text("2")).value() == Boolean(False)

    def test_comparison_rejects_text(self) -> None:
        with pytest.raises(FormulaTypeError):
            Greater(Text("b"), Text("a")).value()

    def test_shared_between_threads(self) -> None:
        f = Mul(Add(Number(2), Number(3)), Number(10))
        results: list[str] = []

        def worker() -> None:
            for _ in range(50):
                results.append(str(f))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert set(results) == {"50=MUL(ADD(2,3),10)"}
        assert len(results) == 200
