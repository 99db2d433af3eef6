from ..argtypes import parse_kv_list
from ...fuzzy.io.loader import load_model
from ...fuzzy.model.engine import FuzzyEngine

def cmd_predict(args):
    model = load_model(args.model)
    engine = FuzzyEngine(model, steps=getattr(args, "steps", None))
    out = engine.evaluate(*parse_kv_list(args.kv))
    print(f"{out.name}: {out.value:.6g}")
    return 0
