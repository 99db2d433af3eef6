import json
import sys
from typing import Dict

from ..argtypes import parse_kv_list
from ...fuzzy.io.loader import load_model
from ...fuzzy.model.engine import FuzzyEngine


# ========= utils: ANSI / pretty =========

_RESET = "\x1b[0m"

def _use_ansi() -> bool:
    return sys.stdout.isatty()

def _ansi_color(mu: float) -> str:
    """
    Color by membership degree:
      >= 0.50 green
      >= 0.20 yellow
      <  0.20 grey
    """
    if not _use_ansi():
        return ""
    if mu >= 0.50:
        return "\x1b[32m"  # green
    if mu >= 0.20:
        return "\x1b[33m"  # yellow
    return "\x1b[90m"      # grey


# ========= main =========

def cmd_show(args):
    """
    --model PATH               : .fz / .yaml / .json model
    --at x=1 y=2 / --at "x=1,y=2": point at which membership degrees are shown
    --json                     : dump the model document instead
    """
    model = load_model(args.model)
    if getattr(args, "json", False):
        print(json.dumps(model.to_dict(), indent=2))
        return 0

    engine = FuzzyEngine(model)
    engine.setup()
    at: Dict[str, float] = {k.lower(): v for k, v in parse_kv_list(getattr(args, "at", None))}
    if at:
        engine.set_inputs(*at.items())

    print(f"Model: {model.name} (steps={engine.steps})")
    print("Inputs:")
    for var in model.input_variables:
        lv = engine.symbol_table.get(var.name)
        if var.name.lower() in at:
            parts = []
            for term in lv.terms:
                mu = lv.fuzzify(term)
                color = _ansi_color(mu)
                reset = _RESET if color else ""
                parts.append(f"{color}{term}({mu:.2f}){reset}")
            print(f"  {lv.name} = {lv.value:g} -> " + ", ".join(parts))
        else:
            print(f"  {lv}")
    print("Outputs:")
    for var in model.output_variables:
        print(f"  {engine.symbol_table.get(var.name)}")
    print("Rules:")
    for i, rule in enumerate(engine.rule_set, 1):
        suffix = ""
        if at and rule.status.name == "DONE":
            suffix = f"  H={rule.compute_degree_of_relevance():.4f}"
        print(f"  R{i}: {rule.text} [{rule.status.name}]{suffix}")
    return 0
