from typing import Iterable
from .types import Float

# --- T-norm (AND) ---
def t_min(vals: Iterable[Float]) -> Float:
    it = iter(vals)
    try:
        m = float(next(it))
    except StopIteration:
        return 1.0
    for v in it:
        if v < m: m = float(v)
    return m

# --- S-norm (OR) ---
def s_max(vals: Iterable[Float]) -> Float:
    it = iter(vals)
    try:
        m = float(next(it))
    except StopIteration:
        return 0.0
    for v in it:
        if v > m: m = float(v)
    return m

# premise operators by their postfix marker
OPERATORS = {
    "AND": t_min,
    "OR": s_max,
}
