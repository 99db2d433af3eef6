import argparse
from ..argtypes import parse_kv, parse_var_col_map
# command imports:
from .apply import cmd_apply
from .validate import cmd_validate
from .show import cmd_show
from .explain import cmd_explain
from .predict import cmd_predict
from .run import cmd_run

def build_parser():
    fmt = argparse.ArgumentDefaultsHelpFormatter
    ap = argparse.ArgumentParser(
        prog="fuzzyrules",
        description=("Fuzzy rule inference CLI: min/max rule evaluation, max superposition "
                     "and center-of-mass defuzzification (validate/show -> predict/explain -> apply)"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  fuzzyrules validate --model car.fz\n"
            "  fuzzyrules show --model car.fz --at carSpeed=70\n"
            "  fuzzyrules predict --model car.fz carSpeed=70\n"
            "  fuzzyrules explain --model car.yaml carSpeed=70 --json\n"
            "  fuzzyrules apply --model car.fz --csv speeds.csv --col-map carSpeed=speed --out forces.csv\n"
            "  fuzzyrules run --config pipeline.yaml\n"
        )
    )
    ap.add_argument("-v", "--verbose", action="count", default=0,
                    help="debug log output")
    ap.add_argument("-q", "--quiet", action="store_true", help="only log errors")

    sub = ap.add_subparsers(dest="cmd", required=True)

    # validate
    sp_v = sub.add_parser("validate", help="Parse all rules and report their status", formatter_class=fmt)
    sp_v.add_argument("--model", required=True, help=".fz, .yaml/.yml or .json model")
    sp_v.set_defaults(func=cmd_validate)

    # show
    sp_s = sub.add_parser("show", help="Show variables/terms/rules; optionally degrees at a point",
                          formatter_class=fmt)
    sp_s.add_argument("--model", required=True)
    sp_s.add_argument("--at", nargs="*", help="var=value pairs")
    sp_s.add_argument("--json", action="store_true", help="dump the model document as JSON")
    sp_s.set_defaults(func=cmd_show)

    # predict
    sp_p = sub.add_parser("predict", help="Crisp output for one sample", formatter_class=fmt)
    sp_p.add_argument("--model", required=True)
    sp_p.add_argument("kv", nargs="+", type=parse_kv, help="var=value pairs")
    sp_p.add_argument("--steps", type=int, default=None, help="discretization steps (model default when missing)")
    sp_p.set_defaults(func=cmd_predict)

    # explain
    sp_e = sub.add_parser("explain", help="Per-rule degree of relevance for one sample", formatter_class=fmt)
    sp_e.add_argument("--model", required=True)
    sp_e.add_argument("kv", nargs="+", type=parse_kv, help="var=value pairs")
    sp_e.add_argument("--json", action="store_true")
    sp_e.set_defaults(func=cmd_explain)

    # apply
    sp_a = sub.add_parser("apply", help="Evaluate the model for every CSV row", formatter_class=fmt)
    g_io = sp_a.add_argument_group("Input/Output")
    g_io.add_argument("--model", required=True)
    g_io.add_argument("--csv", required=True)
    g_io.add_argument("--out", help="output CSV file (stdout when missing)")
    g_io.add_argument("--steps", type=int, default=None)
    sp_a.add_argument("--col-map", dest="map", type=parse_var_col_map,
                      help="var=column map, e.g. carSpeed=0 or carSpeed=speed")
    sp_a.set_defaults(func=cmd_apply)

    # run
    sp_run = sub.add_parser("run", help="Run commands from a config file")
    sp_run.add_argument("--config", required=True, help="path to config.yaml / config.json")
    sp_run.set_defaults(func=cmd_run)

    return ap
