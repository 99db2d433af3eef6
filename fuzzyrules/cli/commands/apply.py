import csv
import logging
import math
import sys
from typing import Dict, List

from ...fuzzy.core.types import FuzzyError
from ...fuzzy.io.loader import load_model
from ...fuzzy.model.engine import FuzzyEngine
from ..argtypes import parse_var_col_map

logger = logging.getLogger(__name__)

def _is_float_cell(s: str) -> bool:
    try:
        float(s)
        return True
    except ValueError:
        return False

def _resolve_mapping(mapping, colnames: List[str], header_mode: bool, inputs: List[str]) -> Dict[str, int]:
    """var -> column index; explicit map first, then header names, then column order."""
    if mapping:
        out = {}
        for vn, spec in mapping.items():
            if isinstance(spec, int):
                if not 0 <= spec < len(colnames):
                    raise FuzzyError(f"Column index {spec} (for {vn}) out of range (columns: {len(colnames)})")
                out[vn] = spec
            elif header_mode and spec in colnames:
                out[vn] = colnames.index(spec)
            else:
                raise FuzzyError(f"Column '{spec}' (for {vn}) does not exist (available: {colnames})")
        return out

    if header_mode:
        lowered = [c.lower() for c in colnames]
        auto = {vn: lowered.index(vn.lower()) for vn in inputs if vn.lower() in lowered}
        if auto:
            return auto

    if len(colnames) < len(inputs):
        raise FuzzyError(f"Not enough columns: available={len(colnames)}, needed={len(inputs)}.")
    return {vn: i for i, vn in enumerate(inputs)}

def cmd_apply(args):
    """
    Evaluate the model for every CSV row (batch mode).
    Supports: --col-map var=column,..., header auto-mapping, --out (stdout when missing).
    """
    model = load_model(args.model)
    engine = FuzzyEngine(model, steps=getattr(args, "steps", None))
    inputs = [v.name for v in model.input_variables]
    oname = model.output_variable_name

    mapping = getattr(args, "map", None) or {}
    if isinstance(mapping, str):
        mapping = parse_var_col_map(mapping)

    out_path = getattr(args, "out", None)
    out_f = open(out_path, "w", newline="", encoding="utf-8") if out_path else None
    try:
        writer = csv.writer(out_f if out_f else sys.stdout)
        with open(args.csv, newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            first = next(reader, None)
            if first is None:
                raise FuzzyError(f"Empty CSV file: {args.csv}")

            # --- header detection ---
            header_mode = any(not _is_float_cell(c) for c in first)
            if header_mode:
                colnames = [c.strip() for c in first]
            else:
                colnames = [f"c{i}" for i in range(len(first))]
                f.seek(0)
                reader = csv.reader(f)

            cols = _resolve_mapping(mapping, colnames, header_mode, inputs)
            for vn, idx in cols.items():
                logger.info("[apply] %s <- [%d] %s", vn, idx, colnames[idx])

            writer.writerow(list(cols) + [oname])
            count = 0
            for lineno, row in enumerate(reader, 2 if header_mode else 1):
                if not row:
                    continue
                data = {}
                for vn, idx in cols.items():
                    val = row[idx].strip() if idx < len(row) else ""
                    if not _is_float_cell(val):
                        raise FuzzyError(f"Row {lineno}: value '{val}' for {vn} is not a number")
                    data[vn] = float(val)
                out = engine.evaluate(data)
                value = "" if math.isnan(out.value) else f"{out.value:.6g}"
                writer.writerow([f"{v:g}" for v in data.values()] + [value])
                count += 1
    finally:
        if out_f:
            out_f.close()

    if out_path:
        print(f"[apply] {count} results written to {out_path}")
    return 0
