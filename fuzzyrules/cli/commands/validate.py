from ...fuzzy.core.rule import FuzzyRuleStatus
from ...fuzzy.io.loader import load_model
from ...fuzzy.model.engine import FuzzyEngine

def cmd_validate(args):
    model = load_model(args.model)
    engine = FuzzyEngine(model)
    engine.setup()
    print(str(engine.rule_set))
    bad = [r for r in engine.rule_set if r.status is FuzzyRuleStatus.ERRONEOUS]
    if bad:
        print(f"FAILED: {len(bad)} of {len(engine.rule_set)} rules are erroneous")
        return 1
    print(f"OK: inputs={len(model.input_variables)}, outputs={len(model.output_variables)}, "
          f"rules={len(engine.rule_set)}, steps={engine.steps}")
    return 0
