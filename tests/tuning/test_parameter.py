"""Tests for parameter descriptors and the parameter space."""

import math

import numpy as np
import pytest

from revac.exceptions import RevacConfigError
from revac.tuning import NumpyRandomSource, Parameter, ParameterSpace


def test_space_preserves_declaration_order() -> None:
    space = ParameterSpace([("b", [0, 1]), ("a", (-5, 5))])
    assert space.names == ["b", "a"]
    assert space[1] == Parameter("a", -5.0, 5.0)
    assert space.to_mapping([0.25, 3.0]) == {"b": 0.25, "a": 3.0}


def test_from_mapping_keeps_insertion_order() -> None:
    space = ParameterSpace.from_mapping({"x": [0, 10], "y": [1, 2]})
    assert space.names == ["x", "y"]
    assert space.describe() == {"x": [0.0, 10.0], "y": [1.0, 2.0]}


@pytest.mark.parametrize(
    "spec",
    [
        [],
        [("x", [2, 1])],
        [("x", [0, math.inf])],
        [("x", [0, 1]), ("x", [0, 2])],
        [("", [0, 1])],
        [("x", [0, 1, 2])],
        [("x", ["low", 1])],
    ],
)
def test_invalid_parameters_are_rejected(spec) -> None:
    with pytest.raises(RevacConfigError):
        ParameterSpace(spec)


def test_sample_stays_inside_declared_ranges() -> None:
    space = ParameterSpace([("a", [0, 1]), ("b", [-5, 5]), ("c", [3, 3])])
    random = NumpyRandomSource(seed=7)
    for _ in range(200):
        vector = space.sample(random)
        assert vector.shape == (3,)
        assert space.contains(vector)
        assert vector[2] == 3.0


def test_to_mapping_rejects_wrong_length() -> None:
    space = ParameterSpace([("a", [0, 1])])
    with pytest.raises(RevacConfigError):
        space.to_mapping(np.array([0.1, 0.2]))


def test_numpy_random_source_is_reproducible() -> None:
    first = NumpyRandomSource(seed=3)
    second = NumpyRandomSource(seed=3)
    assert [first.uniform(0, 1) for _ in range(5)] == [second.uniform(0, 1) for _ in range(5)]
    assert [first.pick(4) for _ in range(5)] == [second.pick(4) for _ in range(5)]
    assert first.uniform(2.5, 2.5) == 2.5
