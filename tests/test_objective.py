import random

import pytest

from errors import MalformedCode
from models import Location
from objective import Objective, parse_connections
from tests.data import DIFFICULTY_CATALOGUE, PUZZLE, PUZZLE_CONNECTIONS


def test_connections_decode_into_corner_pairs():
    assert parse_connections(PUZZLE_CONNECTIONS) == [
        (Location(0, 0), Location(1, 1)),
        (Location(2, 0), Location(1, 1)),
        (Location(4, 0), Location(4, 2)),
    ]
    assert PUZZLE.connections() == tuple(parse_connections(PUZZLE_CONNECTIONS))
    assert Objective().connections() == ()


@pytest.mark.parametrize("pairs", ["00x1", "001"])
def test_bad_connections_raise(pairs):
    with pytest.raises(MalformedCode):
        Objective("", pairs)


@pytest.mark.parametrize("pairs", ["00\u00b21", "00\u06631", "\uff10011"])
def test_non_ascii_digits_in_connections_raise(pairs):
    with pytest.raises(MalformedCode) as exc:
        parse_connections(pairs)
    assert exc.value.reason == "connection"


def test_bad_initial_state_raises():
    with pytest.raises(MalformedCode):
        Objective("c00")


def test_initial_codes():
    assert Objective("c00Nf10E").initial_codes() == ["c00N", "f10E"]
    assert Objective().initial_codes() == []


def test_new_objective_picks_from_difficulty_pool():
    assert Objective.new_objective(1, DIFFICULTY_CATALOGUE) == PUZZLE
    picked = Objective.new_objective(2, DIFFICULTY_CATALOGUE, rng=random.Random(3))
    assert picked in DIFFICULTY_CATALOGUE[2]


def test_new_objective_is_reproducible_for_a_seed():
    first = Objective.new_objective(2, DIFFICULTY_CATALOGUE, rng=random.Random(11))
    second = Objective.new_objective(2, DIFFICULTY_CATALOGUE, rng=random.Random(11))
    assert first == second


@pytest.mark.parametrize("difficulty", [3, 99])
def test_new_objective_unknown_difficulty(difficulty):
    with pytest.raises(LookupError):
        Objective.new_objective(difficulty, DIFFICULTY_CATALOGUE)
