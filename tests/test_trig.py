import pytest
import sympy as sp

from dronesim.trig import apply_sum_rules, main, simplify_expression

a, b, c, d, k = sp.symbols("a b c d k")


@pytest.mark.parametrize(
    "expr, expected",
    [
        (sp.sin(a) * sp.cos(b) + sp.sin(b) * sp.cos(a), sp.sin(a + b)),
        (sp.cos(a) * sp.cos(b) - sp.sin(a) * sp.sin(b), sp.cos(a + b)),
        (sp.cos(a) * sp.cos(b) + sp.sin(a) * sp.sin(b), sp.cos(a - b)),
        (sp.sin(a) * sp.cos(b) - sp.sin(b) * sp.cos(a), sp.sin(a - b)),
        (sp.sin(c) * sp.cos(d) - sp.sin(d) * sp.cos(c), sp.sin(c - d)),
    ],
)
def test_identities_from_rule_table(expr, expected):
    assert apply_sum_rules(expr) == expected


def test_unmatched_expression_is_unchanged():
    expr = sp.sin(a) + sp.cos(b)
    assert apply_sum_rules(expr) == expr


def test_extra_terms_are_kept():
    expr = sp.sin(a) * sp.cos(b) + sp.sin(b) * sp.cos(a) + sp.cos(a) * sp.cos(b)
    assert apply_sum_rules(expr) == sp.sin(a + b) + sp.cos(a) * sp.cos(b)


def test_numeric_multiplier_is_preserved():
    expr = 2 * (sp.sin(a) * sp.cos(b) + sp.sin(b) * sp.cos(a))
    assert apply_sum_rules(expr) == 2 * sp.sin(a + b)


def test_nested_sum_inside_product():
    expr = k * (sp.cos(a) * sp.cos(b) - sp.sin(a) * sp.sin(b))
    assert apply_sum_rules(expr) == k * sp.cos(a + b)


def test_rules_preserve_value():
    expr = sp.sin(a) * sp.cos(b) - sp.sin(b) * sp.cos(a) + sp.cos(c)
    result = apply_sum_rules(expr)
    assert sp.simplify(sp.expand_trig(result) - expr) == 0
    assert sp.count_ops(result) < sp.count_ops(expr)


def test_simplify_expression_is_equivalent_and_shorter():
    text = "sin(a)*cos(b) + sin(b)*cos(a)"
    original = sp.sin(a) * sp.cos(b) + sp.sin(b) * sp.cos(a)
    result = simplify_expression(text)
    assert sp.simplify(sp.expand_trig(result) - original) == 0
    assert sp.count_ops(result) < sp.count_ops(original)


def test_simplify_expression_rejects_bad_input():
    with pytest.raises(ValueError):
        simplify_expression("sin(a")


def test_main_rules_default_examples(capsys):
    assert main(["--rules"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert lines[0] == "1. Simplified sin(a)*cos(b) + sin(b)*cos(a): sin(a + b)"
    assert lines[4].endswith(": sin(c - d)")


def test_main_simplify_given_expression(capsys):
    assert main(["sin(a)*cos(b) + sin(b)*cos(a)"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Original expression 1: sin(a)*cos(b) + sin(b)*cos(a)"
    assert lines[1].startswith("Simplified expression 1: ")


def test_main_reports_parse_error(capsys):
    assert main(["--rules", "cos(("]) == 1
    assert "Error" in capsys.readouterr().err