# tests/test_search.py
import pytest

from litcal.search import MIN_SCORE, best_n, score, suggest

NAMES = ["Saint Anne", "Saint Andrew", "Saint Andrew Avellino", "Saint Joseph"]
TITLES = [(), ("Apostle",), ("Confessor",), ("Spouse of the Blessed Virgin Mary",)]


def test_exact_match():
    assert score("Saint Joseph", "saint joseph") == 1.0


def test_containment():
    assert score("joseph", "Saint Joseph") == pytest.approx(0.85)
    assert score("Saint Joseph the Worker", "Saint Joseph") == pytest.approx(0.85)


def test_word_overlap():
    assert score("joseph saint", "Saint Joseph") == pytest.approx(0.7)


def test_no_match():
    assert score("xyz", "Saint Andrew") == 0.0
    assert MIN_SCORE == 0.2


def test_best_n_orders_by_score():
    hits = best_n("andrew", NAMES, 2)
    assert [n for n, _ in hits] == ["Saint Andrew", "Saint Andrew Avellino"]
    assert hits[0][1] > hits[1][1]


def test_suggest_matches_titles():
    hits = suggest("apostle", NAMES, TITLES)
    assert hits[0][0] == "Saint Andrew"


def test_suggest_limit_and_threshold():
    assert len(suggest("saint", NAMES, TITLES, limit=3)) == 3
    assert all(s > MIN_SCORE for _, s in suggest("saint", NAMES, TITLES))
    assert suggest("qqqqzzzz", NAMES, TITLES) == []
