from typing import List

class FuzzyError(Exception):
    """Domain error for fuzzy framework."""

class FuzzyEngineError(FuzzyError):
    """Model/registration errors and evaluation of rules that are not ready."""

class RuleError(FuzzyError):
    """Error that aborts parsing of a single rule; recorded on the rule."""

class IllegalNameError(RuleError):
    def __init__(self, index: int):
        super().__init__(f"Illegal name @{index}")
        self.index = index

class RuleSyntaxError(RuleError):
    def __init__(self, expected):
        # expected: Token or free text
        if isinstance(expected, str):
            super().__init__(f"Syntax error: {expected}")
        else:
            super().__init__(f"Syntax error: {expected} expected")
        self.expected = expected

class UndefinedSymbolError(RuleError):
    def __init__(self, ident: str):
        super().__init__(f"Symbol '{ident}' is not defined")
        self.ident = ident

Float = float
Curve = List[List[Float]]  # [xs, ys]
