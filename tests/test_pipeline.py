import pytest

from partsearch.schemas import ScoredCandidate
from partsearch.search.pipeline import filter_by_year, paginate
from partsearch.search.ranker import rank


def _candidates(make_record, count):
    return [
        ScoredCandidate(record=make_record(f"P{i}", "Kia", "filtro", 2000 + i, 2005 + i), score=i / 100)
        for i in range(count)
    ]


def test_first_page_of_scenario(toyota_store, config):
    ranking = rank(toyota_store, "Toyota", config, candidate_cap=10)
    page = paginate(ranking.candidates, page=1, limit=10, max_limit=100, total=ranking.total)
    assert page.total == 2
    assert page.total_pages == 1
    assert [c.record.product_id for c in page.items] == ["A1", "A2"]


def test_page_past_the_end_is_empty(make_record):
    page = paginate(_candidates(make_record, 3), page=5, limit=10, max_limit=100)
    assert page.items == ()
    assert page.total == 3
    assert page.total_pages == 1


def test_limit_is_clamped_to_max(make_record):
    page = paginate(_candidates(make_record, 3), page=1, limit=500, max_limit=100)
    assert page.limit == 100
    assert page.total_pages == 1


def test_no_candidates_means_no_pages():
    page = paginate([], page=1, limit=10, max_limit=100)
    assert page.total == 0
    assert page.total_pages == 0


def test_explicit_total_drives_page_count(make_record):
    page = paginate(_candidates(make_record, 4), page=1, limit=2, max_limit=100, total=9)
    assert page.total == 9
    assert page.total_pages == 5
    assert len(page.items) == 2


def test_concatenated_pages_reproduce_candidates(make_record):
    candidates = _candidates(make_record, 23)
    first = paginate(candidates, page=1, limit=5, max_limit=100)
    assert first.total_pages == 5
    collected = []
    for number in range(1, first.total_pages + 1):
        collected.extend(paginate(candidates, page=number, limit=5, max_limit=100).items)
    assert collected == candidates


@pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0)])
def test_invalid_page_or_limit_is_rejected(make_record, page, limit):
    with pytest.raises(ValueError):
        paginate(_candidates(make_record, 3), page=page, limit=limit, max_limit=100)


def test_year_filter_scenario(toyota_store, config):
    candidates = rank(toyota_store, "Toyota", config).candidates
    kept = filter_by_year(candidates, 2012)
    assert [c.record.product_id for c in kept] == ["A2"]
    assert paginate(kept, page=1, limit=10, max_limit=100).total == 1


def test_year_filter_bounds_are_inclusive(toyota_store, config):
    candidates = rank(toyota_store, "Toyota", config).candidates
    assert [c.record.product_id for c in filter_by_year(candidates, 2015)] == ["A1"]
    assert [c.record.product_id for c in filter_by_year(candidates, 2020)] == ["A1"]
    assert [c.record.product_id for c in filter_by_year(candidates, 2014)] == ["A2"]
    assert filter_by_year(candidates, 2030) == []


def test_year_filter_keeps_exactly_the_records_in_range(make_record):
    candidates = _candidates(make_record, 10)
    kept = filter_by_year(candidates, 2006)
    for candidate in candidates:
        in_range = candidate.record.year_from <= 2006 <= candidate.record.year_to
        assert (candidate in kept) == in_range
