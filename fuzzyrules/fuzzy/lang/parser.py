"""
LL(1) parser for fuzzy rules 'IF <premise> THEN <conclusion>'.

With x standing for a simple clause 'LV is LT' and + for AND/OR, premise and
conclusion are sentences like  x | (x) | (x+x) | (x+(x+x)) | ...

  S := IDENT X | '(' B ')'
  B := S C
  C := + S {+ S}
  X := IS IDENT

Operands are pushed before their operator, giving a postfix stack per side:
  (x1 is a1 and x2 is a2)  ->  x1 a1 IS x2 a2 IS AND

Operators are held on a delay stack and only flushed when ')' closes them.
AND/OR between top-level clauses (no enclosing parentheses) are never pushed:
  x1 is a1 and x2 is a2    ->  x1 a1 IS x2 a2 IS
so such a premise evaluates to the degree of its last clause.
"""

from __future__ import annotations
import logging
from typing import List, Optional

from ..core.rule import FuzzyRule, FuzzyRuleStatus
from ..core.types import RuleError, RuleSyntaxError, UndefinedSymbolError
from .scanner import RuleScanner
from .symbols import SymbolTable
from .tokens import Token

logger = logging.getLogger(__name__)

_OPERATORS = (Token.AND, Token.OR)


class _ParseRun:
    """State of one parse() call: scanner, lookahead, delay stack, target stack."""

    def __init__(self, rule: FuzzyRule, symbols: Optional[SymbolTable]) -> None:
        self.rule = rule
        self.symbols = symbols
        self.scanner = RuleScanner(rule.text)
        self.token: Optional[Token] = None
        self.op_delay: List[Token] = []
        self.stack: List[str] = rule.premises

    def get(self, record: bool = True) -> None:
        if record:
            self.rule.add_token(self.token)
        if self.scanner.has_more_tokens():
            self.token = self.scanner.next_token()

    # ---------- productions ----------

    def s(self) -> None:
        if self.token is Token.LEFT_PAR:
            self.get()
            self.b()
            if self.token is not Token.RIGHT_PAR:
                raise RuleSyntaxError(Token.RIGHT_PAR)
            for op in reversed(self.op_delay):
                self.stack.append(str(op))
            self.op_delay.clear()
            self.get()
        elif self.token is Token.IDENT:
            ident = self.scanner.identifier
            if self.symbols is not None and not self.symbols.validate_lv(ident):
                raise UndefinedSymbolError(ident)
            self.stack.append(ident)
            self.get()
            self.x()
        else:
            raise RuleSyntaxError(Token.IDENT)

    def b(self) -> None:
        self.s()
        self.c()

    def c(self) -> None:
        if self.token not in _OPERATORS:
            raise RuleSyntaxError("AND or OR expected")
        while self.token in _OPERATORS:
            self.op_delay.append(self.token)
            self.get()
            self.s()

    def x(self) -> None:
        if self.token is not Token.IS:
            raise RuleSyntaxError(Token.IS)
        self.get()
        if self.token is not Token.IDENT:
            raise RuleSyntaxError(Token.IDENT)
        ident_lt = self.scanner.identifier
        ident_lv = self.scanner.last_identifier
        if self.symbols is not None and not self.symbols.validate_lt(ident_lv, ident_lt):
            raise UndefinedSymbolError(ident_lt)
        self.stack.append(ident_lt)
        self.stack.append(str(Token.IS))
        self.get()

    # ---------- rule ----------

    def parse_rule(self) -> None:
        self.get(record=False)

        if self.token is not Token.START:
            raise RuleSyntaxError(Token.START)
        self.get()

        if self.token is not Token.IF:
            raise RuleSyntaxError(Token.IF)

        self.stack = self.rule.premises
        while True:
            self.get()
            self.s()
            if self.token not in (Token.THEN, Token.AND, Token.OR):
                raise RuleSyntaxError("AND, OR or THEN expected")
            if self.token is Token.THEN:
                break

        self.stack = self.rule.conclusion
        while True:
            self.get()
            self.s()
            if not self.scanner.has_more_tokens():
                break

        if self.token is not Token.END:
            raise RuleSyntaxError(Token.END)
        self.get()
        self.rule.set_status(FuzzyRuleStatus.DONE)


class RuleParser:
    """
    Parses rules against a symbol table. Without a table (symbol_table=None)
    variable and term names are not validated.
    Every parse() call works on its own stacks, so one parser may serve
    concurrent parses as long as the table is no longer mutated.
    """

    def __init__(self, symbol_table: Optional[SymbolTable] = None) -> None:
        self.symbol_table = symbol_table

    def parse(self, rule: FuzzyRule) -> FuzzyRule:
        run = _ParseRun(rule, self.symbol_table)
        try:
            run.parse_rule()
        except RuleError as e:
            rule.parsing_error = str(e)
            rule.set_status(FuzzyRuleStatus.ERRONEOUS)
        logger.debug("Parsed rule \"%s\".", rule.text)
        logger.debug("parsing status = %s, parsing error: %s", rule.status.name, rule.parsing_error)
        return rule
