import json

from ..argtypes import parse_kv_list
from ...fuzzy.io.loader import load_model
from ...fuzzy.model.engine import FuzzyEngine

def cmd_explain(args):
    model = load_model(args.model)
    engine = FuzzyEngine(model)
    res = engine.explain(*parse_kv_list(args.kv))
    if getattr(args, "json", False):
        print(json.dumps(res, indent=2))
        return 0
    print(f"Output: {model.output_variable_name}")
    for i, r in enumerate(res, 1):
        if r["status"] != "DONE":
            print(f"  R{i}: {r['rule']}  [{r['status']}] {r['error']}")
            continue
        concl = r["conclusion"]
        print(f"  R{i}: {r['rule']}  H={r['degree']:.4f} -> {concl['var']} is {concl['term']}")
    return 0
