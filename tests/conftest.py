from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from fuzzyrules.fuzzy.core.mfs import MembershipFunction
from fuzzyrules.fuzzy.lang.symbols import SymbolTable
from fuzzyrules.fuzzy.model.knowledge import FuzzyModel, Term, Variable
from fuzzyrules.fuzzy.model.variable import LinguisticVariable


CAR_FZ = """\
# brake behaviour of a car driver
model car
steps 1000

var input carSpeed
mf carSpeed low    tri 20 60 100
mf carSpeed medium tri 60 100 140

var output brakeForce
mf brakeForce moderate tri 40 60 80
mf brakeForce strong   tri 70 85 100

rule if carSpeed is low then brakeForce is moderate
rule if carSpeed is medium then brakeForce is strong
"""


def build_car_model(output_name: str = "brakeForce") -> FuzzyModel:
    speed = Variable("input", "carSpeed", [
        Term.triangle("low", 20, 60, 100),
        Term.triangle("medium", 60, 100, 140),
    ])
    force = Variable("output", output_name, [
        Term.triangle("moderate", 40, 60, 80),
        Term.triangle("strong", 70, 85, 100),
    ])
    return FuzzyModel(
        name="car",
        variables=[speed, force],
        rules=[
            "if carSpeed is low then brakeForce is moderate",
            "if carSpeed is medium then brakeForce is strong",
        ],
    )


def build_dimmer_model() -> FuzzyModel:
    ambient = Variable("input", "ambient", [
        Term.triangle("dark", 0, 0.25, 0.5),
        Term.triangle("medium", 0.25, 0.5, 0.75),
        Term.triangle("bright", 0.5, 0.75, 1),
    ])
    power = Variable("output", "power", [
        Term.triangle("low", 0, 0.25, 0.5),
        Term.triangle("medium", 0.25, 0.5, 0.75),
        Term.triangle("high", 0.5, 0.75, 1),
    ])
    return FuzzyModel(
        name="dimmer",
        variables=[ambient, power],
        rules=[
            "if Ambient is DARK then Power is HIGH",
            "if Ambient is MEDIUM then Power is MEDIUM",
            "if Ambient is BRIGHT then Power is LOW",
        ],
    )


@pytest.fixture
def car_model() -> FuzzyModel:
    return build_car_model()


@pytest.fixture
def dimmer_model() -> FuzzyModel:
    return build_dimmer_model()


@pytest.fixture
def car_table() -> SymbolTable:
    """carSpeed {low, medium} and brakeForce {moderate, strong}, not frozen."""
    table = SymbolTable()
    speed = LinguisticVariable("carSpeed", table)
    speed.add_term("low", MembershipFunction.triangle(20, 60, 100))
    speed.add_term("medium", MembershipFunction.triangle(60, 100, 140))
    force = LinguisticVariable("brakeForce", table, usage="output")
    force.add_term("moderate", MembershipFunction.triangle(40, 60, 80))
    force.add_term("strong", MembershipFunction.triangle(70, 85, 100))
    return table


@pytest.fixture
def write_file(tmp_path: Path):
    def _write(name: str, contents: str) -> Path:
        target = tmp_path / name
        target.write_text(dedent(contents).lstrip(), encoding="utf8")
        return target
    return _write


@pytest.fixture
def car_fz(write_file) -> Path:
    return write_file("car.fz", CAR_FZ)
