from __future__ import annotations
import logging
from dataclasses import dataclass
from .types import Float, Curve, FuzzyError, FuzzyEngineError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MembershipFunction:
    """
    Trapezoid /-\\ given by start <= left_top <= right_top <= end and a height.
    A triangle is the degenerate case left_top == right_top.
    height == 1 -> term definition; height < 1 -> reasoned conclusion.
    """
    start: Float
    left_top: Float
    right_top: Float
    end: Float
    height: Float = 1.0

    def __post_init__(self) -> None:
        if not (self.start <= self.left_top <= self.right_top <= self.end):
            raise FuzzyError(
                f"Membership function requires start <= left_top <= right_top <= end (got {self.start}, "
                f"{self.left_top}, {self.right_top}, {self.end})")
        if not (0.0 <= self.height <= 1.0):
            raise FuzzyError(f"Membership function height must be in [0, 1] (got {self.height})")

    @classmethod
    def triangle(cls, start: Float, top: Float, end: Float) -> "MembershipFunction":
        return cls(float(start), float(top), float(top), float(end))

    @classmethod
    def trapezoid(cls, start: Float, left_top: Float, right_top: Float, end: Float) -> "MembershipFunction":
        return cls(float(start), float(left_top), float(right_top), float(end))

    @property
    def reasoned(self) -> bool:
        return self.height != 1.0

    def support(self) -> tuple[Float, Float]:
        return (self.start, self.end)

    def fuzzify(self, x: Float) -> Float:
        # zero outside the open interval (start, end)
        if not (self.start < x < self.end):
            return 0.0
        if self.left_top <= x <= self.right_top:
            return self.height
        if x < self.left_top:
            return self.height * (x - self.start) / (self.left_top - self.start)
        return self.height * (self.end - x) / (self.end - self.right_top)

    def compute_reasoning(self, degree_of_relevance: Float) -> "MembershipFunction":
        """Scale this term by H: tops pulled towards the centre, height = H."""
        if self.reasoned:
            raise FuzzyEngineError(
                f"Cannot compute reasoning because the membership function {self} was reasoned already")
        h = float(degree_of_relevance)
        if h == 0.0:
            return MembershipFunction(0.0, 0.0, 0.0, 0.0, 0.0)
        left_top = h * (self.left_top - self.start) + self.start
        right_top = self.end - h * (self.end - self.right_top)
        return MembershipFunction(self.start, left_top, right_top, self.end, h)

    def plot(self, x_from: Float, x_to: Float, steps: int) -> Curve:
        """Discretize into steps + 1 samples: [xs, ys]."""
        increment = abs((x_to - x_from) / steps)
        xs = [x_from + increment * i for i in range(steps + 1)]
        ys = [self.fuzzify(x) for x in xs]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("discretisation of %s: from %.4f to %.4f | increment = %.4f | steps = %d",
                         self, x_from, x_to, increment, steps)
        return [xs, ys]

    def __str__(self) -> str:
        return (f"MF {{ start = {self.start:.2f}, left_top = {self.left_top:.2f}, "
                f"right_top = {self.right_top:.2f}, end = {self.end:.2f}, height = {self.height:.2f} }}")
