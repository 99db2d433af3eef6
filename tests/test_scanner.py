import pytest

from fuzzyrules.fuzzy.core.types import IllegalNameError
from fuzzyrules.fuzzy.lang.scanner import RuleScanner, ScannerState
from fuzzyrules.fuzzy.lang.tokens import Token, keyword


def scan_all(text):
    scanner = RuleScanner(text)
    tokens = []
    while scanner.has_more_tokens():
        tokens.append(scanner.next_token())
    return scanner, tokens


def test_next_token_simple_rule():
    _, tokens = scan_all("if carSpeed is low then brakeForce is moderate")
    assert tokens == [
        Token.START, Token.IF, Token.IDENT, Token.IS, Token.IDENT,
        Token.THEN, Token.IDENT, Token.IS, Token.IDENT, Token.END,
    ]


def test_parentheses_and_identifiers():
    scanner, tokens = scan_all("if (carSpeed is low) then (brakeForce is moderate)")
    assert tokens[:4] == [Token.START, Token.IF, Token.LEFT_PAR, Token.IDENT]
    assert tokens.count(Token.LEFT_PAR) == 2
    assert tokens.count(Token.RIGHT_PAR) == 2
    assert scanner.identifiers == ["carspeed", "low", "brakeforce", "moderate"]


def test_keywords_are_case_insensitive():
    _, tokens = scan_all("IF a Is b AND c iS d Or e is f THEN g is h")
    assert Token.AND in tokens and Token.OR in tokens
    assert tokens[1] is Token.IF


def test_identifiers_may_contain_digits():
    scanner, _ = scan_all("if x1 is a12 then y is b")
    assert scanner.identifiers[:2] == ["x1", "a12"]


def test_recent_identifiers():
    scanner = RuleScanner("x1 is a1")
    for _ in range(4):
        scanner.next_token()
    assert scanner.identifier == "a1"
    assert scanner.last_identifier == "x1"


def test_illegal_name_reports_one_based_index():
    scanner = RuleScanner("if x1 is 9a then y is b")
    with pytest.raises(IllegalNameError) as info:
        while scanner.has_more_tokens():
            scanner.next_token()
    assert info.value.index == 10
    assert str(info.value) == "Illegal name @10"


def test_end_is_repeated_after_finish():
    scanner, tokens = scan_all("")
    assert tokens == [Token.START, Token.END]
    assert scanner.state is ScannerState.FINISH
    assert scanner.next_token() is Token.END


def test_keyword_lookup():
    assert keyword("then") is Token.THEN
    assert keyword("literal") is None
