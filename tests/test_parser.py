import pytest

from fuzzyrules.fuzzy.core.rule import FuzzyRule, FuzzyRuleStatus
from fuzzyrules.fuzzy.lang.parser import RuleParser
from fuzzyrules.fuzzy.lang.tokens import Token

T = Token


def parse(text, table=None):
    return RuleParser(table).parse(FuzzyRule(text, table))


@pytest.mark.parametrize("text, premise", [
    ("if (x1 is a1 and x2 is a2) then y is b",
     "x1 a1 IS x2 a2 IS AND"),
    ("if ((x1 is a1 or x2 is a2) and x3 is a3) then y is b",
     "x1 a1 IS x2 a2 IS OR x3 a3 IS AND"),
    ("if (x1 is a1 or (x2 is a2 and x3 is a3)) then y is b",
     "x1 a1 IS x2 a2 IS x3 a3 IS AND OR"),
    ("if (x1 is a1 or (x2 is a2 and x3 is a3) and x4 is a4) then y is b",
     "x1 a1 IS x2 a2 IS x3 a3 IS AND OR x4 a4 IS AND"),
    ("if (x1 is a1 or ((x2 is a2 and x3 is a3 and x4 is a4) or x5 is a5 or (x6 is a6 and x7 is a7))) "
     "then y is b",
     "x1 a1 IS x2 a2 IS x3 a3 IS x4 a4 IS AND AND OR x5 a5 IS x6 a6 IS x7 a7 IS AND OR OR"),
])
def test_premise_is_postfix(text, premise):
    rule = parse(text)
    assert rule.status is FuzzyRuleStatus.DONE
    assert " ".join(rule.premises) == premise
    assert rule.conclusion == ["y", "b", "IS"]


def test_top_level_operators_are_not_pushed():
    rule = parse("if x1 is a1 and x2 is a2 then y is b")
    assert rule.status is FuzzyRuleStatus.DONE
    assert " ".join(rule.premises) == "x1 a1 IS x2 a2 IS"
    assert T.AND in rule.tokens


def test_token_trace_of_parenthesized_rule():
    rule = parse("if (x1 is a1 or (x2 is a2 and x3 is a3) or x4 is a4) then y is b")
    assert rule.status is FuzzyRuleStatus.DONE
    assert rule.parsing_error == "n/a"
    assert rule.tokens == [
        T.START, T.IF, T.LEFT_PAR, T.IDENT, T.IS, T.IDENT, T.OR,
        T.LEFT_PAR, T.IDENT, T.IS, T.IDENT, T.AND, T.IDENT, T.IS, T.IDENT, T.RIGHT_PAR,
        T.OR, T.IDENT, T.IS, T.IDENT, T.RIGHT_PAR,
        T.THEN, T.IDENT, T.IS, T.IDENT, T.END,
    ]


@pytest.mark.parametrize("text, message, trace", [
    ("if x1 is or x2 is a2 then y is b",
     "Syntax error: IDENT expected", 4),
    ("if  is a1 and x2 is a2 then y is b",
     "Syntax error: IDENT expected", 2),
    ("if x1 is a1 or x2  a2 then y is b",
     "Syntax error: IS expected", 7),
    ("if x1 is a1 then ((y is 9b or z is c) and u is d)",
     "Illegal name @25", 10),
    ("if (x1 is a1 or x2 is a2) u is d",
     "Syntax error: AND, OR or THEN expected", 11),
    ("if (x1 is a1  x2 is a2) then u is d",
     "Syntax error: AND or OR expected", 6),
    (" (x1 is a1 or x2 is a2) then u is d",
     "Syntax error: IF expected", 1),
    ("if x1 is a1  x2 is a2 then u is d",
     "Syntax error: AND, OR or THEN expected", 5),
    ("if x1 is a1 and x2 is a2  u is d",
     "Syntax error: AND, OR or THEN expected", 9),
])
def test_syntax_errors(text, message, trace):
    rule = parse(text)
    assert rule.status is FuzzyRuleStatus.ERRONEOUS
    assert rule.parsing_error == message
    assert len(rule.tokens) == trace
    assert rule.tokens[0] is T.START


def test_single_clause_in_parentheses_needs_operator():
    rule = parse("if (x1 is a1) then y is b")
    assert rule.status is FuzzyRuleStatus.ERRONEOUS
    assert rule.parsing_error == "Syntax error: AND or OR expected"


def test_missing_closing_parenthesis():
    rule = parse("if (x1 is a1 and x2 is a2 then y is b")
    assert rule.status is FuzzyRuleStatus.ERRONEOUS
    assert rule.parsing_error == "Syntax error: RIGHT_PAR expected"


@pytest.mark.parametrize("text, symbol", [
    ("if speed is medium then brakeForce is strong", "speed"),
    ("if carSpeed is fast then brakeForce is strong", "fast"),
    ("if carSpeed is low then brakeForce is moderate and carSpeed is moderate", "moderate"),
    ("if carSpeed is low then force is strong", "force"),
])
def test_undefined_symbols(car_table, text, symbol):
    rule = parse(text, car_table)
    assert rule.status is FuzzyRuleStatus.ERRONEOUS
    assert rule.parsing_error == f"Symbol '{symbol}' is not defined"


def test_valid_rule_against_table(car_table):
    rule = parse("if carSpeed is low then brakeForce is moderate", car_table)
    assert rule.status is FuzzyRuleStatus.DONE
    assert rule.premises == ["carspeed", "low", "IS"]
    assert rule.conclusion == ["brakeforce", "moderate", "IS"]


def test_parse_does_not_change_terminal_status():
    parser = RuleParser()
    rule = parser.parse(FuzzyRule("if (x1 is a1) then y is b"))
    assert rule.status is FuzzyRuleStatus.ERRONEOUS
    parser.parse(rule)
    assert rule.status is FuzzyRuleStatus.ERRONEOUS
