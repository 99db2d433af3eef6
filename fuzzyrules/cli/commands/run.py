import logging
from argparse import Namespace

from ...fuzzy.io.loader import load_config
from ...fuzzy.core.types import FuzzyError
from .apply import cmd_apply
from .explain import cmd_explain
from .predict import cmd_predict
from .show import cmd_show
from .validate import cmd_validate

logger = logging.getLogger(__name__)

# section -> (command, option defaults)
_SECTIONS = (
    ("validate", cmd_validate, {}),
    ("show", cmd_show, {"at": None, "json": False}),
    ("predict", cmd_predict, {"kv": [], "steps": None}),
    ("explain", cmd_explain, {"kv": [], "json": False}),
    ("apply", cmd_apply, {"out": None, "map": None, "steps": None}),
)

def _ns(section: str, d: dict, defaults: dict) -> Namespace:
    if not isinstance(d, dict):
        raise FuzzyError(f"Config section '{section}' must be a mapping")
    opts = dict(defaults)
    opts.update({k.replace("-", "_"): v for k, v in d.items()})
    if "col_map" in opts:
        opts["map"] = opts.pop("col_map")
    return Namespace(**opts)

def cmd_run(args):
    cfg = load_config(args.config)
    unknown = set(cfg) - {name for name, _, _ in _SECTIONS}
    if unknown:
        logger.warning("Ignoring unknown config sections: %s", ", ".join(sorted(unknown)))

    rc = 0
    for name, cmd, defaults in _SECTIONS:
        if name not in cfg:
            continue
        print(f"[run] {name}")
        rc = max(rc, cmd(_ns(name, cfg[name], defaults)) or 0)
    return rc
