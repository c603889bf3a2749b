"""Symbolic simplification of sine and cosine angle-sum expressions."""

from __future__ import annotations

import argparse
import sys
from tokenize import TokenError

import sympy as sp
from sympy.parsing.sympy_parser import parse_expr

RULE_EXAMPLES = (
    "sin(a)*cos(b) + sin(b)*cos(a)",
    "cos(a)*cos(b) - sin(a)*sin(b)",
    "cos(a)*cos(b) + sin(a)*sin(b)",
    "sin(a)*cos(b) - sin(b)*cos(a)",
    "sin(c)*cos(d) - sin(d)*cos(c)",
)

SIMPLIFY_EXAMPLES = (
    "sin(a)*cos(b) + sin(b)*cos(a) + cos(a)*cos(b)",
    "(sin(a + b) + cos(c + d)) * (sin(e + f) + cos(g + h))",
    "(sin(a) + cos(b)) * (sin(c) - cos(d)) + (sin(e) + cos(f))",
    "sin(a*b + c*d) * cos(a*b - c*d)",
    "sin(a + b + c) * cos(a - b - c)",
    "(sin(a) * cos(b) + cos(a) * sin(b)) * (sin(c) * cos(d) + cos(c) * sin(d))",
)

# (kind, first angle, second angle, multiplier)
_TrigTerm = tuple[str, sp.Expr, sp.Expr, sp.Expr]


def _classify(term: sp.Expr) -> _TrigTerm | None:
    factors = sp.Mul.make_args(term)
    sines = [f for f in factors if isinstance(f, sp.sin)]
    cosines = [f for f in factors if isinstance(f, sp.cos)]
    if len(sines) + len(cosines) != 2:
        return None
    rest = sp.Mul(*(f for f in factors if not isinstance(f, (sp.sin, sp.cos))))
    if len(sines) == 1:
        return "sc", sines[0].args[0], cosines[0].args[0], rest
    if len(cosines) == 2:
        return "cc", cosines[0].args[0], cosines[1].args[0], rest
    return "ss", sines[0].args[0], sines[1].args[0], rest


def _combine(first: _TrigTerm, second: _TrigTerm) -> sp.Expr | None:
    kind1, u1, v1, m1 = first
    kind2, u2, v2, m2 = second
    if kind1 == kind2 == "sc" and u1 == v2 and v1 == u2 and u1 != v1:
        if m2 == m1:
            return m1 * sp.sin(u1 + v1)
        if m2 == -m1:
            if m1.could_extract_minus_sign():
                return m2 * sp.sin(u2 - v2)
            return m1 * sp.sin(u1 - v1)
        return None
    if {kind1, kind2} == {"cc", "ss"}:
        cc, ss = (first, second) if kind1 == "cc" else (second, first)
        _, cu, cv, cm = cc
        _, su, sv, sm = ss
        if not ((cu == su and cv == sv) or (cu == sv and cv == su)):
            return None
        if sm == -cm:
            return cm * sp.cos(cu + cv)
        if sm == cm:
            return cm * sp.cos(cu - cv)
    return None


def _combine_terms(terms: tuple[sp.Expr, ...]) -> sp.Expr:
    pending = list(terms)
    combined = []
    while pending:
        term = pending.pop(0)
        info = _classify(term)
        if info is not None:
            for index, other in enumerate(pending):
                other_info = _classify(other)
                if other_info is None:
                    continue
                merged = _combine(info, other_info)
                if merged is not None:
                    del pending[index]
                    term = merged
                    break
        combined.append(term)
    return sp.Add(*combined)


def _rewrite(expr: sp.Expr) -> sp.Expr:
    if not expr.args:
        return expr
    rebuilt = expr.func(*(_rewrite(arg) for arg in expr.args))
    if isinstance(rebuilt, sp.Add):
        return _combine_terms(rebuilt.args)
    return rebuilt


def apply_sum_rules(expr: sp.Expr) -> sp.Expr:
    """Contract sine/cosine products into angle sums and differences.

    Applies sin x cos y ± sin y cos x -> sin(x ± y) and
    cos x cos y ∓ sin x sin y -> cos(x ± y) wherever they occur.
    """
    expr = sp.sympify(expr)
    previous = None
    while expr != previous:
        previous = expr
        expr = _rewrite(expr)
    return expr


def _parse(text: str) -> sp.Expr:
    try:
        return parse_expr(text)
    except (SyntaxError, TypeError, ValueError, TokenError, sp.SympifyError) as exc:
        raise ValueError(f"cannot parse expression {text!r}: {exc}") from exc


def simplify_expression(text: str) -> sp.Expr:
    """Parse ``text`` and return its simplified form; ValueError if unparsable."""
    return sp.simplify(_parse(text))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="dronesim-trig", description="Simplify trigonometric expressions.")
    parser.add_argument("--rules", action="store_true", help="apply only the angle-sum identities")
    parser.add_argument("expressions", nargs="*")
    args = parser.parse_args(argv)
    try:
        if args.rules:
            for number, text in enumerate(args.expressions or RULE_EXAMPLES, 1):
                print(f"{number}. Simplified {text}: {apply_sum_rules(_parse(text))}")
        else:
            expressions = args.expressions or SIMPLIFY_EXAMPLES
            for number, text in enumerate(expressions, 1):
                print(f"Original expression {number}: {text}")
            results = [simplify_expression(text) for text in expressions]
            for number, result in enumerate(results, 1):
                print(f"Simplified expression {number}: {result}")
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())