import pytest

from config.settings import ScoringConfig
from game.scoring import build_outcome, compute_final_score, compute_time_score, round_half_up, star_rating

DISCRETE = ScoringConfig().discrete_weights
CONTINUOUS = ScoringConfig().continuous_weights


def test_finishing_at_the_limit_scores_accuracy_only():
    final = compute_final_score(40, 40, 100, 0, DISCRETE)
    assert final == 60
    assert star_rating(final) == 3


def test_errors_are_penalised():
    final = compute_final_score(0, 40, 100, 2, DISCRETE)
    assert final == 80
    assert star_rating(final) == 4


def test_continuous_weights():
    assert compute_final_score(0, 60, 50, 0, CONTINUOUS) == 65


def test_score_never_negative():
    assert compute_final_score(100, 10, 0, 30, DISCRETE) == 0
    assert compute_time_score(100, 10) == 0


@pytest.mark.parametrize(
    "final, stars",
    [(100, 5), (90, 5), (89, 4), (70, 4), (69, 3), (50, 3), (49, 2), (30, 2), (29, 1), (0, 1)],
)
def test_star_thresholds(final, stars):
    assert star_rating(final) == stars


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_build_outcome():
    outcome = build_outcome("t", 10.0, 40, 100.0, 0, DISCRETE, completed_at="2024-01-01T00:00:00Z")
    assert outcome.final_score == 90
    assert outcome.star_rating == 5
    assert outcome.completed_at == "2024-01-01T00:00:00Z"
    assert outcome.to_record()["task_id"] == "t"
