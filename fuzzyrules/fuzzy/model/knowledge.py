from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..core.defuzz import DEFAULT_STEPS
from ..core.mfs import MembershipFunction
from ..core.types import Float, FuzzyError
from .variable import USAGES


@dataclass(frozen=True)
class Term:
    """
    Definition of one linguistic term:
      - triangle:  (name, start, top, end)
      - trapezoid: (name, start, left_top, right_top, end)
    """
    name: str
    start: Float
    left_top: Float
    right_top: Float
    end: Float

    @classmethod
    def triangle(cls, name: str, start: Float, top: Float, end: Float) -> "Term":
        return cls(name, float(start), float(top), float(top), float(end))

    @classmethod
    def trapezoid(cls, name: str, start: Float, left_top: Float, right_top: Float, end: Float) -> "Term":
        return cls(name, float(start), float(left_top), float(right_top), float(end))

    @property
    def shape(self) -> str:
        return "tri" if self.left_top == self.right_top else "trap"

    def membership_function(self) -> MembershipFunction:
        return MembershipFunction.trapezoid(self.start, self.left_top, self.right_top, self.end)


@dataclass
class Variable:
    usage: str                    # 'input' | 'output'
    name: str
    terms: List[Term] = field(default_factory=list)

    def add_term(self, term: Term) -> None:
        self.terms.append(term)


@dataclass
class FuzzyModel:
    # --- variables and rules ---
    name: str = "model"
    variables: List[Variable] = field(default_factory=list)
    rules: List[str] = field(default_factory=list)

    # --- engine settings ---
    steps: int = DEFAULT_STEPS

    # ---------- helpers ----------
    def add_variable(self, var: Variable) -> None:
        self.variables.append(var)

    def add_rule(self, rule: str) -> None:
        self.rules.append(rule)

    def variable(self, name: str) -> Optional[Variable]:
        key = name.lower()
        return next((v for v in self.variables if v.name.lower() == key), None)

    @property
    def input_variables(self) -> List[Variable]:
        return [v for v in self.variables if v.usage == "input"]

    @property
    def output_variables(self) -> List[Variable]:
        return [v for v in self.variables if v.usage == "output"]

    def is_valid_input_variable(self, name: str) -> bool:
        key = name.lower()
        return any(v.name.lower() == key for v in self.input_variables)

    @property
    def output_variable_name(self) -> Optional[str]:
        outs = self.output_variables
        return outs[0].name if outs else None

    # ---------- dict form (YAML / JSON) ----------
    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FuzzyModel":
        """
        Builds a model from:
          {name, steps, variables: [{usage, name, terms: [{name, tri: [a,b,c]} | {name, trap: [a,b,c,d]}]}],
           rules: ["if ... then ...", ...]}
        """
        if not isinstance(d, dict):
            raise FuzzyError("Model document must be a mapping")
        steps = _to_number(int, d.get("steps", DEFAULT_STEPS), "steps")
        if steps < 1:
            raise FuzzyError(f"steps: positive number required (got {steps})")
        model = cls(name=str(d.get("name", "model")), steps=steps)

        for vd in _list_of(d, "variables", dict, "model"):
            usage = str(vd.get("usage", "input")).lower()
            if usage not in USAGES:
                raise FuzzyError(f"Unknown usage '{usage}' for variable '{vd.get('name')}'")
            if "name" not in vd:
                raise FuzzyError("Variable without name")
            var = Variable(usage=usage, name=str(vd["name"]))
            for td in _list_of(vd, "terms", dict, f"variable '{var.name}'"):
                var.add_term(_term_from_dict(var.name, td))
            model.add_variable(var)

        for rule in _list_of(d, "rules", str, "model"):
            model.add_rule(rule)
        return model

    def to_dict(self) -> Dict[str, Any]:
        variables = []
        for v in self.variables:
            terms = []
            for t in v.terms:
                if t.shape == "tri":
                    terms.append({"name": t.name, "tri": [t.start, t.left_top, t.end]})
                else:
                    terms.append({"name": t.name, "trap": [t.start, t.left_top, t.right_top, t.end]})
            variables.append({"usage": v.usage, "name": v.name, "terms": terms})
        return {"name": self.name, "steps": self.steps, "variables": variables, "rules": list(self.rules)}


def _to_number(kind: Callable[[Any], Any], value: Any, what: str) -> Any:
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise FuzzyError(f"{what}: expected a number, got {value!r}") from None


def _list_of(d: Dict[str, Any], key: str, item_type: type, owner: str) -> List[Any]:
    """d[key] as a list whose entries are item_type (missing/null -> [])."""
    items = d.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise FuzzyError(f"'{key}' of {owner} must be a list, got {type(items).__name__}")
    for i, item in enumerate(items, 1):
        if not isinstance(item, item_type):
            raise FuzzyError(f"'{key}' entry {i} of {owner} must be a {_TYPE_NAMES[item_type]}, got {item!r}")
    return items


_TYPE_NAMES = {dict: "mapping", str: "string"}


def _params(vname: str, td: Dict[str, Any], shape: str) -> List[Float]:
    raw = td[shape]
    where = f"{shape} parameters of '{vname}.{td['name']}'"
    if not isinstance(raw, list):
        raise FuzzyError(f"{where}: expected a list, got {raw!r}")
    return [_to_number(float, p, where) for p in raw]


def _term_from_dict(vname: str, td: Dict[str, Any]) -> Term:
    if "name" not in td:
        raise FuzzyError(f"Term without name in variable '{vname}'")
    if "tri" in td:
        params = _params(vname, td, "tri")
        if len(params) != 3:
            raise FuzzyError(f"tri: expected 3 parameters (start top end) for '{vname}.{td['name']}'")
        return Term.triangle(str(td["name"]), *params)
    if "trap" in td:
        params = _params(vname, td, "trap")
        if len(params) != 4:
            raise FuzzyError(f"trap: expected 4 parameters (start left_top right_top end) for '{vname}.{td['name']}'")
        return Term.trapezoid(str(td["name"]), *params)
    raise FuzzyError(f"Term '{vname}.{td['name']}' needs 'tri' or 'trap' parameters")
