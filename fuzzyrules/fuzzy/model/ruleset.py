from __future__ import annotations
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from joblib import Parallel, delayed

from ..core.defuzz import DEFAULT_STEPS, compute_center_of_mass, compute_superposition
from ..core.mfs import MembershipFunction
from ..core.rule import FuzzyRule, FuzzyRuleStatus
from ..core.types import Float, FuzzyEngineError
from ..lang.parser import RuleParser

logger = logging.getLogger(__name__)


class FuzzyRuleSet:
    """Set of rules keyed by their normalized text (insertion ordered)."""

    def __init__(self) -> None:
        self._rules: Dict[str, FuzzyRule] = {}

    def add_rule(self, rule: FuzzyRule) -> bool:
        """Add rule unless a rule with the same text is present; returns True if added."""
        if rule.text in self._rules:
            logger.warning("Cannot add rule \"%s\" to the rule set because it is already present.", rule.text)
            return False
        self._rules[rule.text] = rule
        return True

    @property
    def rules(self) -> Tuple[FuzzyRule, ...]:
        return tuple(self._rules.values())

    def __iter__(self) -> Iterator[FuzzyRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule: object) -> bool:
        return isinstance(rule, FuzzyRule) and rule.text in self._rules

    # ---------- parsing ----------

    def parse_rules(self, parser: RuleParser, workers: Optional[int] = None) -> None:
        """
        Parse all IDLE rules. With ``workers`` the rules are parsed on joblib's
        threading backend; each parse only touches its own rule, the symbol
        table has to be frozen beforehand.
        """
        idle = [r for r in self._rules.values() if r.status is FuzzyRuleStatus.IDLE]
        if not workers or workers <= 1:
            for rule in idle:
                parser.parse(rule)
            return

        table = parser.symbol_table
        if table is not None and not table.frozen:
            raise FuzzyEngineError("Cannot parse rules concurrently because the symbol table is not frozen.")
        Parallel(n_jobs=workers, verbose=0, backend="threading")(
            delayed(parser.parse)(rule) for rule in idle
        )

    @property
    def status(self) -> FuzzyRuleStatus:
        # ERRONEOUS > IDLE > DONE
        statuses = {r.status for r in self._rules.values()}
        if FuzzyRuleStatus.ERRONEOUS in statuses:
            return FuzzyRuleStatus.ERRONEOUS
        if FuzzyRuleStatus.IDLE in statuses:
            return FuzzyRuleStatus.IDLE
        return FuzzyRuleStatus.DONE

    # ---------- evaluation ----------

    def compute_conclusions(self) -> List[MembershipFunction]:
        return [rule.compute_conclusion() for rule in self._rules.values()]

    def evaluate_rules(self, steps: int = DEFAULT_STEPS) -> Float:
        """Reason every rule, superpose the conclusions (max) and defuzzify (center of mass)."""
        status = self.status
        if status is not FuzzyRuleStatus.DONE:
            raise FuzzyEngineError(f"Cannot evaluate rule set because its status is \"{status.name}\".")
        superposition = compute_superposition(self.compute_conclusions(), steps)
        return compute_center_of_mass(superposition)

    def __str__(self) -> str:
        lines = []
        for rule in self._rules.values():
            line = f"{rule.text} | status = {rule.status.name}"
            if rule.status is FuzzyRuleStatus.ERRONEOUS:
                line += f" | message = {rule.parsing_error}"
            lines.append(line)
        return "\n".join(lines)
