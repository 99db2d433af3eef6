import math

import pytest

from fuzzyrules.fuzzy.core.defuzz import compute_center_of_mass, compute_superposition
from fuzzyrules.fuzzy.core.mfs import MembershipFunction
from fuzzyrules.fuzzy.core.types import FuzzyEngineError, FuzzyError


@pytest.fixture
def trapezoid():
    return MembershipFunction(0.0, 1.0, 3.0, 4.0)


@pytest.fixture
def triangle():
    return MembershipFunction.triangle(2.0, 5.0, 8.0)


def test_fuzzify_trapezoid(trapezoid):
    assert trapezoid.fuzzify(0.0) == 0.0
    assert trapezoid.fuzzify(1.0) == 1.0
    assert trapezoid.fuzzify(3.0) == 1.0
    assert trapezoid.fuzzify(4.0) == 0.0
    assert trapezoid.fuzzify(0.5) == pytest.approx(0.5)
    assert trapezoid.fuzzify(3.5) == pytest.approx(0.5)


def test_fuzzify_triangle(triangle):
    assert triangle.fuzzify(2.0) == 0.0
    assert triangle.fuzzify(5.0) == 1.0
    assert triangle.fuzzify(8.0) == 0.0
    assert triangle.fuzzify(-10.0) == 0.0
    assert triangle.fuzzify(100.0) == 0.0


def test_invalid_corner_order_is_rejected():
    with pytest.raises(FuzzyError):
        MembershipFunction(0.0, 3.0, 1.0, 4.0)
    with pytest.raises(FuzzyError):
        MembershipFunction(0.0, 1.0, 2.0, 3.0, height=1.5)


def test_compute_reasoning_trapezoid(trapezoid):
    mf = trapezoid.compute_reasoning(0.5)
    assert mf.height == 0.5
    assert mf.fuzzify(0.5) == pytest.approx(0.5)
    assert mf.fuzzify(3.5) == pytest.approx(0.5)
    assert mf.fuzzify(2.0) == pytest.approx(0.5)
    assert mf.fuzzify(0.25) == pytest.approx(0.25)
    assert mf.fuzzify(3.75) == pytest.approx(0.25)


def test_compute_reasoning_triangle(triangle):
    mf = triangle.compute_reasoning(0.65)
    assert mf.fuzzify(4.0) == pytest.approx(0.65)
    assert mf.fuzzify(6.0) == pytest.approx(0.65)
    assert mf.fuzzify(5.0) == pytest.approx(0.65)
    assert mf.fuzzify(3.5) == pytest.approx(0.5)
    assert mf.fuzzify(6.5) == pytest.approx(0.5)


def test_reasoning_with_zero_gives_zero_function(triangle):
    mf = triangle.compute_reasoning(0.0)
    assert (mf.start, mf.left_top, mf.right_top, mf.end, mf.height) == (0.0, 0.0, 0.0, 0.0, 0.0)
    assert mf.fuzzify(5.0) == 0.0


def test_reasoned_function_cannot_be_reasoned_again(triangle):
    mf = triangle.compute_reasoning(0.5)
    assert mf.reasoned
    with pytest.raises(FuzzyEngineError):
        mf.compute_reasoning(0.5)


def test_plot_trapezoid(trapezoid):
    xs, ys = trapezoid.plot(0.0, 8.0, 8)
    assert xs == pytest.approx([float(i) for i in range(9)])
    assert ys == pytest.approx([0.0, 1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0])


def test_plot_triangle(triangle):
    xs, ys = triangle.plot(0.0, 8.0, 8)
    assert len(xs) == 9
    assert ys == pytest.approx([0.0, 0.0, 0.0, 0.33, 0.66, 1.0, 0.66, 0.33, 0.0], abs=0.01)


def test_superposition_takes_pointwise_max(trapezoid, triangle):
    mfs = [trapezoid.compute_reasoning(0.5), triangle.compute_reasoning(0.65)]
    xs, ys = compute_superposition(mfs, 8)
    assert xs == pytest.approx([float(i) for i in range(9)])
    assert ys == pytest.approx([0.0, 0.5, 0.5, 0.5, 0.65, 0.65, 0.65, 0.33, 0.0], abs=0.01)


def test_superposition_uses_max_of_all_functions():
    low = MembershipFunction.triangle(0, 2, 4).compute_reasoning(0.2)
    high = MembershipFunction.triangle(0, 2, 4).compute_reasoning(0.9)
    other = MembershipFunction.triangle(4, 6, 8).compute_reasoning(0.1)
    _, ys = compute_superposition([high, low, other], 8)
    assert ys[2] == pytest.approx(0.9)
    assert ys[6] == pytest.approx(0.1)


def test_superposition_window_contains_origin():
    mfs = [MembershipFunction.triangle(10, 12, 14), MembershipFunction.triangle(12, 14, 16)]
    xs, _ = compute_superposition(mfs, 4)
    assert xs[0] == 0.0
    assert xs[-1] == pytest.approx(16.0)


def test_superposition_needs_two_functions(triangle):
    with pytest.raises(FuzzyEngineError):
        compute_superposition([triangle], 8)


def test_center_of_mass_of_superposition(trapezoid, triangle):
    mfs = [trapezoid.compute_reasoning(0.5), triangle.compute_reasoning(0.65)]
    com = compute_center_of_mass(compute_superposition(mfs, 8))
    assert com == pytest.approx(3.9867, abs=1e-4)


def test_center_of_mass_rectangle():
    assert compute_center_of_mass([[0, 1, 2, 3, 4], [0, 0, 4, 4, 0]]) == 2.5


def test_center_of_mass_zero_curve_is_nan():
    assert math.isnan(compute_center_of_mass([[0.0] * 5, [0.0] * 5]))


def test_str_shows_corners(trapezoid):
    assert str(trapezoid) == ("MF { start = 0.00, left_top = 1.00, right_top = 3.00, "
                              "end = 4.00, height = 1.00 }")
