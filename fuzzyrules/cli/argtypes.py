import argparse
from typing import Dict, List, Sequence, Tuple, Union


def parse_kv(s: str) -> Tuple[str, float]:
    """'carSpeed=70' -> ('carSpeed', 70.0)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"Invalid item: '{s}' (expected 'var=value').")
    k, v = (t.strip() for t in s.split("=", 1))
    if not k:
        raise argparse.ArgumentTypeError(f"Empty variable name in: '{s}'.")
    try:
        return k, float(v)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a number: '{v}' (in '{s}').")


def parse_kv_list(items: Union[str, Sequence, None]) -> List[Tuple[str, float]]:
    """
    Accepts None, "x=1,y=2" or ["x=1", "y=2"] (config files pass either form).
    Already parsed pairs are passed through.
    """
    if not items:
        return []
    if isinstance(items, str):
        items = [items]
    out: List[Tuple[str, float]] = []
    for elem in items:
        if isinstance(elem, (tuple, list)):
            out.append((str(elem[0]), float(elem[1])))
            continue
        for tok in str(elem).split(","):
            tok = tok.strip()
            if tok:
                out.append(parse_kv(tok))
    return out


def parse_var_col_map(s: str) -> Dict[str, Union[int, str]]:
    """'var=column,...' (column: index or header name)."""
    if not s:
        return {}
    m = {}
    for pair in s.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            raise argparse.ArgumentTypeError(f"Invalid item: '{pair}' (expected 'var=column').")
        k, v = (t.strip() for t in pair.split("=", 1))
        if not k or not v:
            raise argparse.ArgumentTypeError(f"Empty key or value in: '{pair}'.")
        m[k] = int(v) if v.isdigit() else v
    return m
