import json

from game.runtime.models import Outcome


def outcome(stars: int, score: int = 50) -> Outcome:
    return Outcome(task_id="click_01", final_score=score, star_rating=stars, elapsed_seconds=12.5, error_count=1)


def test_first_record_is_stored(progress_store):
    assert progress_store.get_best("click_01") is None
    assert progress_store.record_if_better("click_01", outcome(2))
    assert progress_store.get_best("click_01").star_rating == 2


def test_lower_rating_keeps_existing(progress_store):
    progress_store.record_if_better("click_01", outcome(4, 80))
    assert not progress_store.record_if_better("click_01", outcome(3, 60))
    assert progress_store.get_best("click_01").star_rating == 4


def test_equal_rating_keeps_existing(progress_store):
    progress_store.record_if_better("click_01", outcome(3, 55))
    assert not progress_store.record_if_better("click_01", outcome(3, 65))
    assert progress_store.get_best("click_01").final_score == 55


def test_higher_rating_replaces(progress_store):
    progress_store.record_if_better("click_01", outcome(3))
    assert progress_store.record_if_better("click_01", outcome(5, 95))
    best = progress_store.get_best("click_01")
    assert best.star_rating == 5
    assert best.final_score == 95


def test_file_format_and_best_stars(progress_store):
    progress_store.record_if_better("click_01", outcome(4))
    payload = json.loads(progress_store.path.read_text(encoding="utf-8"))
    assert payload["progress"]["click_01"]["star_rating"] == 4
    assert progress_store.best_stars() == {"click_01": 4}


def test_corrupt_file_reads_as_empty(progress_store):
    progress_store.path.write_text("{not json", encoding="utf-8")
    assert progress_store.get_best("click_01") is None
    assert progress_store.record_if_better("click_01", outcome(1))
