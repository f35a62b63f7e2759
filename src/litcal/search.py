"""
litcal.search
-------------
Fuzzy matching of feast names.

Scores lie in [0, 1]; anything below 0.2 is treated as no match. Direct
containment beats word overlap, which beats the character-level blend of
n-gram overlap and difflib's sequence ratio.
"""

from __future__ import annotations

from difflib import SequenceMatcher
from typing import Dict, List, Sequence, Set, Tuple

MIN_SCORE = 0.2


def _ngrams(s: str, n: int) -> Set[str]:
    if len(s) < n:
        return {s}
    return {s[i:i + n] for i in range(len(s) - n + 1)}


def _jaccard(a: Set[str], b: Set[str]) -> float:
    if not a and not b:
        return 1.0
    union = a | b
    return len(a & b) / len(union) if union else 0.0


def _partial_word_hit(query_word: str, other_word: str) -> bool:
    return query_word in other_word or other_word in query_word


def _word_overlap(query: str, candidate: str) -> float:
    """Share of query words found inside (or containing) some candidate word."""
    qw = query.split()
    cw = candidate.split()
    if not qw or not cw:
        return 0.0
    hits = sum(1 for w in qw if any(_partial_word_hit(w, c) for c in cw))
    return hits / len(qw)


def score(query: str, candidate: str) -> float:
    q = query.lower()
    c = candidate.lower()

    if q == c:
        return 1.0
    if q and q in c:
        return 0.9 - (abs(len(c) - len(q)) / len(c)) * 0.1
    if c and c in q:
        return 0.85

    overlap = _word_overlap(q, c)
    if overlap > 0.5:
        return overlap * 0.7

    grams = 0.6 * _jaccard(_ngrams(q, 2), _ngrams(c, 2)) + 0.4 * _jaccard(_ngrams(q, 3), _ngrams(c, 3))
    s = 0.4 * grams + 0.6 * SequenceMatcher(None, q, c).ratio()
    return s if s >= MIN_SCORE else 0.0


def best_n(query: str, candidates: Sequence[str], n: int) -> List[Tuple[str, float]]:
    """The n best-scoring candidates, best first; zero scores are dropped."""
    scored = [(c, score(query, c)) for c in candidates]
    scored = [(c, s) for c, s in scored if s > 0]
    scored.sort(key=lambda cs: cs[1], reverse=True)
    return scored[:n]


def suggest(query: str, names: Sequence[str], titles: Sequence[Sequence[str]], limit: int = 5) -> List[Tuple[str, float]]:
    """
    Rank feast names for a free-text query.

    `titles[i]` are the extra titles of `names[i]`; a feast is matched both on
    its bare name and on its name joined with its titles, keeping the better
    score. If that yields fewer than five hits, feasts sharing most of the
    query's words are added with a low score.
    """
    with_titles = [f"{n}\t{','.join(t)}" for n, t in zip(names, titles)]

    merged: Dict[str, float] = {}
    for cand, s in best_n(query, with_titles, 8) + best_n(query, names, 8):
        key = cand.split("\t", 1)[0]
        if s > merged.get(key, -1.0):
            merged[key] = s
    results = list(merged.items())

    if len(results) < 5:
        words = query.lower().split()
        for name in names:
            if len(results) >= 8:
                break
            if any(r.lower() == name.lower() for r, _ in results):
                continue
            feast_words = name.lower().split()
            matched = sum(1 for w in words if any(_partial_word_hit(w, fw) for fw in feast_words))
            if matched > 0 and matched >= len(words) - 1:
                results.append((name, 0.2 + 0.1 * matched / len(words)))

    results.sort(key=lambda r: r[1], reverse=True)
    return [(n, s) for n, s in results if s > MIN_SCORE][:limit]
