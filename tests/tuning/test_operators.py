"""Tests for the crossover and relevance-estimation mutation operators."""

import numpy as np
import pytest

from revac.tuning import NumpyRandomSource, crossover, mutate, mutation_window


def test_crossover_copies_each_dimension_from_the_picked_parent(scripted_random) -> None:
    parents = [[1.0, 10.0, 100.0], [2.0, 20.0, 200.0], [3.0, 30.0, 300.0]]
    child = crossover(scripted_random(picks=[2, 0, 1]), parents)
    assert child.tolist() == [3.0, 10.0, 200.0]


def test_crossover_never_interpolates_with_the_whole_population() -> None:
    random = NumpyRandomSource(seed=11)
    population = np.array([[0.1, 4.0], [0.7, -2.0], [0.4, 1.5], [0.9, 3.3]])
    for _ in range(50):
        child = crossover(random, population)
        for dimension, value in enumerate(child):
            assert value in population[:, dimension]


def test_crossover_requires_parents(scripted_random) -> None:
    with pytest.raises(ValueError):
        crossover(scripted_random(), [])


def test_mutation_window_uses_ranks_around_the_target() -> None:
    table = np.array([[5.0], [1.0], [9.0], [3.0], [7.0]])
    # Sorted values: 1, 3, 5, 7, 9; slot 0 holds the median.
    assert mutation_window(table, 0, 0, 1) == (3.0, 7.0)
    assert mutation_window(table, 0, 0, 2) == (1.0, 9.0)


def test_mutation_window_is_truncated_at_population_edges() -> None:
    table = np.array([[5.0], [1.0], [9.0], [3.0], [7.0]])
    assert mutation_window(table, 1, 0, 2) == (1.0, 5.0)
    assert mutation_window(table, 2, 0, 1) == (7.0, 9.0)


def test_mutation_window_is_never_inverted() -> None:
    random = np.random.default_rng(5)
    table = random.normal(size=(12, 4))
    for slot in range(12):
        for dimension in range(4):
            for h in (1, 3, 20):
                low, high = mutation_window(table, slot, dimension, h)
                assert low <= high


def test_large_radius_spans_the_observed_range(scripted_random) -> None:
    table = np.array([[0.2, -1.0], [0.8, 4.0], [0.5, 2.0]])
    random = scripted_random()
    mutate(random, table, 1, 50)
    assert random.intervals == [(0.2, 0.8), (-1.0, 4.0)]


def test_mutate_draws_inside_each_window_and_leaves_table_untouched() -> None:
    table = np.array([[0.0, 10.0], [1.0, 20.0], [2.0, 30.0], [3.0, 40.0]])
    snapshot = table.copy()
    random = NumpyRandomSource(seed=1)
    for _ in range(30):
        vector = mutate(random, table, 2, 1)
        assert 1.0 <= vector[0] <= 3.0
        assert 20.0 <= vector[1] <= 40.0
    np.testing.assert_array_equal(table, snapshot)


def test_mutate_with_converged_dimension_is_degenerate(scripted_random) -> None:
    table = np.array([[4.0, 0.0], [4.0, 1.0], [4.0, 2.0]])
    vector = mutate(scripted_random(fraction=0.9), table, 0, 1)
    assert vector[0] == 4.0
