from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..core.rule import FuzzyRule, FuzzyRuleStatus
from ..core.types import Float, FuzzyEngineError
from ..lang.parser import RuleParser
from ..lang.symbols import SymbolTable
from .knowledge import FuzzyModel
from .ruleset import FuzzyRuleSet
from .variable import LinguisticVariable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputVariable:
    name: str
    value: Float


@dataclass(frozen=True)
class OutputVariable:
    name: str
    value: Float


InputLike = Union[InputVariable, Tuple[str, Float], Mapping[str, Float]]


class FuzzyEngine:
    """
    Inference over a FuzzyModel: fuzzify inputs, compute each rule's degree of
    relevance (min/max), reason the conclusions, superpose them (max) and
    defuzzify by center of mass. ``steps`` is the discretization resolution.
    The symbol table and the rules are built and parsed on first use.
    """
    def __init__(self, model: FuzzyModel, steps: Optional[int] = None, workers: Optional[int] = None) -> None:
        self.model = model
        self.steps = int(steps if steps is not None else model.steps)
        if self.steps < 1:
            raise FuzzyEngineError(f"Number of discretization steps must be positive (got {self.steps}).")
        self.workers = workers
        self.symbol_table: Optional[SymbolTable] = None
        self.rule_set: Optional[FuzzyRuleSet] = None
        self._ready = False

    # ---------- setup ----------

    @property
    def ready(self) -> bool:
        return self._ready

    def setup(self) -> None:
        if self._ready:
            return
        outs = self.model.output_variables
        if len(outs) != 1:
            raise FuzzyEngineError(
                f"Model \"{self.model.name}\" must declare exactly one output variable (found {len(outs)}).")

        table = SymbolTable()
        for var in self.model.variables:
            lv = LinguisticVariable(var.name, usage=var.usage)
            for term in var.terms:
                lv.add_term(term.name, term.membership_function())
            if not table.register(lv):
                raise FuzzyEngineError(
                    f"Cannot register linguistic variable \"{lv.name}\" with symbol table because the "
                    f"variable is registered already.")
            logger.debug("Created linguistic variable %s", lv)
        table.freeze()

        rule_set = FuzzyRuleSet()
        for text in self.model.rules:
            if not rule_set.add_rule(FuzzyRule(text, table)):
                raise FuzzyEngineError(f"Cannot add rule \"{text}\" to the rule set because it is present already.")
        rule_set.parse_rules(RuleParser(table), workers=self.workers)

        for rule in rule_set:
            if rule.status is FuzzyRuleStatus.ERRONEOUS:
                logger.warning("Rule \"%s\" is erroneous: %s", rule.text, rule.parsing_error)

        self.symbol_table = table
        self.rule_set = rule_set
        self._ready = True

    # ---------- inputs ----------

    @staticmethod
    def _iter_inputs(inputs: Iterable[InputLike]) -> List[Tuple[str, Float]]:
        pairs: List[Tuple[str, Float]] = []
        for item in inputs:
            if isinstance(item, InputVariable):
                pairs.append((item.name, float(item.value)))
            elif isinstance(item, Mapping):
                pairs.extend((str(k), float(v)) for k, v in item.items())
            else:
                name, value = item
                pairs.append((str(name), float(value)))
        return pairs

    def set_inputs(self, *inputs: InputLike) -> None:
        """Validate all names first, then set the crisp values."""
        self.setup()
        pairs = self._iter_inputs(inputs)
        for name, _ in pairs:
            if not self.model.is_valid_input_variable(name):
                raise FuzzyEngineError(f"\"{name}\" is not a valid input variable.")
        for name, value in pairs:
            self.symbol_table.get(name).set_value(value)

    # ---------- API ----------

    def evaluate(self, *inputs: InputLike) -> OutputVariable:
        logger.debug("Evaluating model \"%s\"", self.model.name)
        self.set_inputs(*inputs)

        com = self.rule_set.evaluate_rules(self.steps)
        logger.debug("--- defuzzification")
        logger.debug("x = %s", com)

        out_lv = self.symbol_table.get(self.model.output_variable_name)
        out_lv.set_value(com)
        return OutputVariable(self.model.output_variable_name, com)

    def explain(self, *inputs: InputLike) -> List[Dict[str, Any]]:
        """Per-rule status, degree of relevance and conclusion for the given inputs."""
        self.set_inputs(*inputs)
        out: List[Dict[str, Any]] = []
        for rule in self.rule_set:
            done = rule.status is FuzzyRuleStatus.DONE
            out.append({
                "rule": rule.text,
                "status": rule.status.name,
                "premise": " ".join(rule.premises),
                "degree": rule.compute_degree_of_relevance() if done else None,
                "conclusion": {"var": rule.conclusion_variable, "term": rule.conclusion_term} if done else None,
                "error": None if done else rule.parsing_error,
            })
        return out

    def print_result(self, inp: InputVariable, output: OutputVariable, padding: int = 8, precision: int = 4) -> str:
        return (f"{inp.name}.input = {inp.value:{padding}.{precision}f} -> "
                f"{output.name}.output = {output.value:{padding}.{precision}f}")

    def __str__(self) -> str:
        self.setup()
        lines = ["--- Linguistic Variables"]
        lines.extend(str(lv) for lv in self.symbol_table)
        lines.append("")
        lines.append("--- Fuzzy Rules")
        lines.append(str(self.rule_set))
        return "\n".join(lines) + "\n"
