from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from ..lang.tokens import Token
from .mfs import MembershipFunction
from .norms import OPERATORS
from .types import Float, FuzzyEngineError

if TYPE_CHECKING:
    from ..lang.symbols import SymbolTable

logger = logging.getLogger(__name__)

_IS = str(Token.IS)


class FuzzyRuleStatus(Enum):
    IDLE = "idle"            # not parsed yet
    DONE = "done"            # parsed successfully
    ERRONEOUS = "erroneous"  # parsed with errors


@dataclass(eq=False)
class FuzzyRule:
    """
    'if x1 is a1 and ... then y is b'. The if-part is the premise, the
    then-part the conclusion; both are filled in postfix order by the parser.
    Rules are identified by their lower-case text.
    """
    text: str
    symbol_table: Optional["SymbolTable"] = None
    premises: List[str] = field(default_factory=list)
    conclusion: List[str] = field(default_factory=list)
    tokens: List[Token] = field(default_factory=list)
    parsing_error: str = "n/a"
    _status: FuzzyRuleStatus = field(default=FuzzyRuleStatus.IDLE, init=False, repr=False)

    def __post_init__(self) -> None:
        self.text = self.text.lower()

    # ---------- status ----------

    @property
    def status(self) -> FuzzyRuleStatus:
        return self._status

    def set_status(self, status: FuzzyRuleStatus) -> None:
        # IDLE -> IDLE | DONE | ERRONEOUS; DONE and ERRONEOUS are terminal
        if self._status is FuzzyRuleStatus.IDLE:
            self._status = status

    def add_token(self, token: Token) -> None:
        self.tokens.append(token)

    def _require_done(self, what: str) -> None:
        if self._status is not FuzzyRuleStatus.DONE:
            raise FuzzyEngineError(
                f"Cannot compute {what} of rule \"{self.text}\" because its status is \"{self._status.name}\".")
        if self.symbol_table is None:
            raise FuzzyEngineError(f"Cannot compute {what} of rule \"{self.text}\" without a symbol table.")

    # ---------- evaluation ----------

    def compute_degree_of_relevance(self) -> Float:
        """
        H of the premise for the current crisp values: each 'LV LT IS' triple
        pushes the fuzzified degree, AND folds with min, OR with max.
        """
        self._require_done("degree of relevance")

        stack: List[Float] = []
        for i, tok in enumerate(self.premises):
            if tok == _IS:
                lv = self.symbol_table.get(self.premises[i - 2])
                stack.append(lv.fuzzify(self.premises[i - 1]))
            elif tok in OPERATORS:
                operand2 = stack.pop()
                operand1 = stack.pop()
                stack.append(OPERATORS[tok]((operand1, operand2)))

        result = stack.pop()
        if result > 0:
            logger.debug("Rule \"%s\" fires. Degree of relevance H = %.4f", self.text, result)
        return result

    def compute_conclusion(self, degree_of_relevance: Optional[Float] = None) -> MembershipFunction:
        """Conclusion term 'y is b' reasoned with H (computed if not given)."""
        self._require_done("conclusion")
        if degree_of_relevance is None:
            degree_of_relevance = self.compute_degree_of_relevance()
        # '... then y is b' -> conclusion = [y, b, IS]
        lv = self.symbol_table.get(self.conclusion[0])
        mf = lv.membership_function(self.conclusion[1])
        return mf.compute_reasoning(degree_of_relevance)

    @property
    def conclusion_variable(self) -> Optional[str]:
        return self.conclusion[0] if self.conclusion else None

    @property
    def conclusion_term(self) -> Optional[str]:
        return self.conclusion[1] if len(self.conclusion) > 1 else None

    # ---------- identity ----------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, FuzzyRule):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return self.text
