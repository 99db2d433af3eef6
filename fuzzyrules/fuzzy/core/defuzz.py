import logging
import math
from typing import Sequence
from .mfs import MembershipFunction
from .types import Float, Curve, FuzzyEngineError

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 1000


def _format_row(label: str, row: Sequence[Float]) -> str:
    return label + "".join(f"{v:12.4f}" for v in row)

def compute_superposition(functions: Sequence[MembershipFunction], steps: int) -> Curve:
    """
    Max-union of the given functions sampled on a shared window
    [min(0, min start), max(0, max end)] with steps + 1 points.
    """
    if len(functions) < 2:
        raise FuzzyEngineError("Cannot compute superposition for less than two membership functions.")

    min_support = 0.0
    max_support = 0.0
    for mf in functions:
        start, end = mf.support()
        if start < min_support:
            min_support = start
        if end > max_support:
            max_support = end
    logger.debug("Superposition is computed from %.2f to %.2f", min_support, max_support)

    xs, ys = functions[0].plot(min_support, max_support, steps)
    ys = list(ys)
    for mf in functions[1:]:
        _, yk = mf.plot(min_support, max_support, steps)
        for i in range(steps + 1):
            if yk[i] > ys[i]:
                ys[i] = yk[i]

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("--- superposition")
        logger.debug(_format_row("x -->", xs))
        logger.debug(_format_row("y -->", ys))
    return [xs, ys]

def compute_center_of_mass(curve: Curve) -> Float:
    """
    Centroid of a piecewise linear curve [xs, ys] by the trapezoidal rule.
    A zero-area curve yields nan.
    """
    xs, ys = curve[0], curve[1]
    num = 0.0
    den = 0.0
    for i in range(len(xs) - 1):
        x1, x2 = xs[i], xs[i + 1]
        y1, y2 = ys[i], ys[i + 1]
        xsi = 0.5 * (x1 + x2)
        ai = 0.5 * (y1 + y2) * (x2 - x1)
        num += xsi * ai
        den += ai
    if den == 0.0:
        return math.nan
    return num / den
