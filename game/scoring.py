from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from config.settings import ScoringConfig
from game.runtime.models import Outcome

SCORING = ScoringConfig()


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_time_score(elapsed_seconds: float, time_limit_seconds: float) -> float:
    return max(0.0, 100.0 - elapsed_seconds / time_limit_seconds * 100.0)


def compute_final_score(
    elapsed_seconds: float,
    time_limit_seconds: float,
    accuracy_score: float,
    error_count: int,
    weights: tuple,
    config: ScoringConfig = SCORING,
) -> int:
    w_time, w_accuracy = weights
    time_score = compute_time_score(elapsed_seconds, time_limit_seconds)
    penalty = error_count * config.error_penalty
    return round_half_up(max(0.0, time_score * w_time + accuracy_score * w_accuracy - penalty))


def star_rating(final_score: int, config: ScoringConfig = SCORING) -> int:
    # Even a failed attempt earns the minimum star count.
    for threshold, stars in config.star_thresholds:
        if final_score >= threshold:
            return stars
    return config.min_stars


def build_outcome(
    task_id: str,
    elapsed_seconds: float,
    time_limit_seconds: float,
    accuracy_score: float,
    error_count: int,
    weights: tuple,
    timed_out: bool = False,
    config: ScoringConfig = SCORING,
    completed_at: Optional[str] = None,
) -> Outcome:
    final = compute_final_score(elapsed_seconds, time_limit_seconds, accuracy_score, error_count, weights, config)
    return Outcome(
        task_id=task_id,
        final_score=final,
        star_rating=star_rating(final, config),
        elapsed_seconds=elapsed_seconds,
        error_count=error_count,
        timed_out=timed_out,
        completed_at=completed_at if completed_at is not None else _utc_now_iso(),
    )
