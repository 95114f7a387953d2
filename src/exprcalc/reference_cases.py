"""Catalog of reference behaviour cases and a runner that checks them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Literal

from .context import EvaluationContext
from .errors import CalcError, ErrorKind, classify_error
from .evaluator import evaluate_block
from .parser import evaluate_expression
from .values import same_number


Mode = Literal["expression", "block"]
Status = Literal["pass", "wrong_value", "wrong_error", "unexpected_error", "missing_error"]


@dataclass(frozen=True)
class ReferenceCase:
    id: str
    mode: Mode
    statements: tuple[str, ...]
    expected: float | None = None
    expected_error: ErrorKind | None = None
    note: str = ""

    @property
    def expects_failure(self) -> bool:
        return self.expected_error is not None


@dataclass(frozen=True)
class CaseOutcome:
    case: ReferenceCase
    status: Status
    got: float | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "pass"


@dataclass(frozen=True)
class CatalogStats:
    total: int
    passed: int
    failed: int

    @property
    def ok(self) -> bool:
        return self.failed == 0


def _expr(case_id: str, source: str, expected: float, note: str = "") -> ReferenceCase:
    return ReferenceCase(id=case_id, mode="expression", statements=(source,), expected=expected, note=note)


def _expr_fail(case_id: str, source: str, error: ErrorKind, note: str = "") -> ReferenceCase:
    return ReferenceCase(id=case_id, mode="expression", statements=(source,), expected_error=error, note=note)


def _block(case_id: str, statements: tuple[str, ...], expected: float, note: str = "") -> ReferenceCase:
    return ReferenceCase(id=case_id, mode="block", statements=statements, expected=expected, note=note)


def _block_fail(case_id: str, statements: tuple[str, ...], error: ErrorKind, note: str = "") -> ReferenceCase:
    return ReferenceCase(id=case_id, mode="block", statements=statements, expected_error=error, note=note)


CATALOG: Final[tuple[ReferenceCase, ...]] = (
    _expr("zero", "0", 0),
    _expr("plus_zero", "+0", 0),
    _expr("minus_zero", "-0", 0),
    _expr("minus_one", "-1", -1),
    _expr("double_minus", "--1", 1, "unary minus is idempotent in pairs"),
    _expr("double_plus", "++1", 1),
    _expr("plus_minus", "+-1", -1),
    _expr("add", "1+1", 2),
    _expr("add_negative", "1+-1", 0),
    _expr("mul_before_add", "3+4*5", 23),
    _expr("paren_mul", "3+(4*5)", 23),
    _expr("paren_add", "(3+4)*5", 35),
    _expr("negated_paren", "-(3+4)*5", -35),
    _expr("whitespace", "(3 + 4) * 5", 35),
    _expr("mixed", "(2+3) * (7-4) + 11", 26),
    _expr("mixed_negated", "(2+3) * -(7-4) + 11", -4),
    _expr("square", "2**2", 4),
    _expr("unary_binds_power_base", "-2**2", 4, "unary minus applies to the base before **"),
    _expr("unary_in_exponent", "2**-2", 0.25),
    _expr("power_before_mul", "3*3**3", 81),
    _expr("power_right_assoc", "2**2**2", 16),
    _expr("power_right_assoc_nonsymmetric", "2**3**2", 512),
    _expr("division_regroups", "8/4/2", 4, "right operand of / re-enters the multiplicative level"),
    _expr("subtraction_left_assoc", "10-3-2", 5),
    _expr_fail("empty", "", ErrorKind.UNEXPECTED_TOKEN),
    _expr_fail("lone_plus", "+", ErrorKind.UNEXPECTED_TOKEN),
    _expr_fail("open_paren", "(", ErrorKind.UNEXPECTED_TOKEN),
    _expr_fail("close_paren", ")", ErrorKind.UNEXPECTED_TOKEN),
    _expr_fail("dangling_plus", "2+", ErrorKind.UNEXPECTED_TOKEN),
    _expr_fail("bad_char", "$", ErrorKind.LEX),
    _expr_fail("bad_trailing_char", "2$", ErrorKind.LEX),
    _expr_fail("unclosed_paren", "-((2+3)", ErrorKind.EXPECTED_RIGHT_PAREN),
    _expr_fail("extra_paren", "-(2+3))", ErrorKind.TRAILING_INPUT),
    _expr_fail("split_double_star", "2* *2", ErrorKind.UNEXPECTED_TOKEN),
    _block("assign_then_read", ("a=1", "a"), 1),
    _block("two_scalars", ("a=3", "b=5", "a+b"), 8),
    _block("chained_assignment", ("a=b=5", "a*b"), 25),
    _block("assignment_value", ("a=44",), 44),
    _block("paren_assignment", ("(a)=177",), 177, "parentheses keep a bare name writable"),
    _block("map_assign", ("@defmap zz", "zz[1]=50"), 50),
    _block("map_paren_assign", ("@defmap zxcv", "(zxcv[1])=255", "(zxcv[(3-2)]-2)"), 253),
    _block(
        "map_arithmetic",
        ("@defmap yx", "yx[1]=50", "yx[2]=yx[3]=4", "mm=8", "yx[1]*mm + yx[2]/yx[3]"),
        401,
    ),
    _block("map_unset_entry", ("@defmap zz", "zz[2]"), math.nan, "absent entries read as NaN"),
    _block("unset_scalar", ("q",), math.nan, "absent scalars read as NaN"),
    _block_fail("unknown_keyword", ("@hello",), ErrorKind.UNEXPECTED_TOKEN),
    _block_fail("index_number", ("1[2]",), ErrorKind.INDEX_ON_NON_IDENTIFIER),
    _block_fail("assign_to_assignment", ("(c=d)=3",), ErrorKind.NOT_WRITABLE),
    _block_fail("scalar_over_map", ("@defmap m", "m=1"), ErrorKind.ASSIGN_TO_MAP_NAME),
    _block_fail("undeclared_map", ("nomap[1]=2",), ErrorKind.MAP_NOT_FOUND),
    _block_fail("unclosed_index", ("@defmap m", "m[1"), ErrorKind.EXPECTED_RIGHT_BRACKET),
)


def _run_case(case: ReferenceCase) -> float | None:
    context = EvaluationContext()
    if case.mode == "expression":
        return evaluate_expression(context, case.statements[0])
    return evaluate_block(case.statements, context)


def _matches(expected: float, got: float | None) -> bool:
    if got is None:
        return False
    if same_number(expected, got):
        return True
    return not math.isnan(expected) and math.isclose(expected, got, rel_tol=1e-12)


def check_case(case: ReferenceCase) -> CaseOutcome:
    try:
        got = _run_case(case)
    except CalcError as err:
        kind = classify_error(err)
        if case.expected_error is None:
            return CaseOutcome(case=case, status="unexpected_error", error=str(err))
        status: Status = "pass" if kind == case.expected_error else "wrong_error"
        return CaseOutcome(case=case, status=status, error=str(err))

    if case.expected_error is not None:
        return CaseOutcome(case=case, status="missing_error", got=got)
    assert case.expected is not None
    status = "pass" if _matches(case.expected, got) else "wrong_value"
    return CaseOutcome(case=case, status=status, got=got)


def run_catalog(cases: tuple[ReferenceCase, ...] = CATALOG) -> list[CaseOutcome]:
    return [check_case(case) for case in cases]


def summarize(outcomes: list[CaseOutcome]) -> CatalogStats:
    passed = sum(1 for outcome in outcomes if outcome.ok)
    return CatalogStats(total=len(outcomes), passed=passed, failed=len(outcomes) - passed)
