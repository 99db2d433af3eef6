# LinguisticVariable: term set + crisp value

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional
from ..core.mfs import MembershipFunction
from ..core.types import Float, FuzzyEngineError

if TYPE_CHECKING:
    from ..lang.symbols import SymbolTable

logger = logging.getLogger(__name__)

USAGES = ("input", "output")

@dataclass(eq=False)
class LinguisticVariable:
    """
    A variable whose values are described by linguistic terms, e.g.
    T(age) = {young, middle aged, old}. ``value`` is the crisp input for
    fuzzification or, for an output variable, the defuzzified result.
    Passing a symbol table registers the variable with it.
    """
    name: str
    symbol_table: Optional["SymbolTable"] = field(default=None, repr=False)
    usage: str = "input"
    terms: Dict[str, MembershipFunction] = field(default_factory=dict)
    value: Float = 0.0

    def __post_init__(self) -> None:
        self.name = self.name.lower()
        if self.usage not in USAGES:
            raise FuzzyEngineError(f"Unknown usage \"{self.usage}\" of linguistic variable \"{self.name}\".")
        if self.symbol_table is not None and not self.symbol_table.register(self):
            raise FuzzyEngineError(
                f"Cannot register linguistic variable \"{self.name}\" with symbol table because the "
                f"variable is registered already.")

    def set_value(self, value: Float) -> None:
        self.value = float(value)
        logger.debug("Set crisp value = %.4f for linguistic variable \"%s\".", self.value, self.name)

    def add_term(self, label: str, mf: MembershipFunction) -> None:
        term = label.lower()
        if term in self.terms:
            raise FuzzyEngineError(
                f"Cannot add linguistic term \"{term}\" because it is already a member of the term set "
                f"of linguistic variable \"{self.name}\".")
        self.terms[term] = mf

    def contains_term(self, label: str) -> bool:
        return label.lower() in self.terms

    def membership_function(self, label: str) -> MembershipFunction:
        term = label.lower()
        if term not in self.terms:
            raise FuzzyEngineError(
                f"Cannot retrieve membership function because linguistic term \"{term}\" is not a member "
                f"of the term set of linguistic variable \"{self.name}\".")
        return self.terms[term]

    def fuzzify(self, label: str) -> Float:
        """Degree of membership of the current value in term ``label``."""
        term = label.lower()
        if term not in self.terms:
            raise FuzzyEngineError(
                f"Cannot compute fuzzification for linguistic term \"{term}\" because it is not a member "
                f"of the term set of linguistic variable \"{self.name}\".")
        return self.terms[term].fuzzify(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinguisticVariable):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return f"T({self.name}) = {{{', '.join(self.terms)}}}"
