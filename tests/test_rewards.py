import numpy as np
import pytest

from game.models import StatBonuses
from game.rewards import award_correct_answer, award_for_answers, distribute_points


def test_distribute_points_sums():
    dist = distribute_points(7, np.random.default_rng(3))
    assert set(dist) == {"power", "loft", "wind"}
    assert sum(dist.values()) == 7
    assert all(v >= 0 for v in dist.values())


def test_distribute_zero_points():
    assert distribute_points(0, np.random.default_rng(0)) == {"power": 0, "loft": 0, "wind": 0}


def test_correct_answer_awards_four_to_eight_points():
    rng = np.random.default_rng(11)
    base = StatBonuses()
    for _ in range(50):
        updated, dist = award_correct_answer(base, rng)
        gained = sum(dist.values())
        assert 4 <= gained <= 8
        assert updated.power - base.power == dist["power"]
        assert updated.loft - base.loft == dist["loft"]
        assert updated.wind - base.wind == dist["wind"]


def test_award_does_not_mutate_input():
    base = StatBonuses()
    award_correct_answer(base, np.random.default_rng(1))
    assert base == StatBonuses()


def test_award_for_answers_is_seeded():
    a = award_for_answers(6, np.random.default_rng(42))
    b = award_for_answers(6, np.random.default_rng(42))
    assert a == b
    gained = (a.power - 10) + (a.loft - 20) + a.wind
    assert 24 <= gained <= 48


def test_no_correct_answers_keeps_base():
    base = StatBonuses(power=3, loft=4, wind=5)
    assert award_for_answers(0, base=base) == base


def test_bonuses_to_launch_parameters():
    params = StatBonuses(power=14, loft=50, wind=3).to_launch_parameters(bounce_limit=2)
    assert params.power == 14
    assert params.launch_angle_degrees() == pytest.approx(45)
    assert params.wind == 3
    assert params.bounce_limit == 2
