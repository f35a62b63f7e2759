"""
litcal.rules.notation
---------------------
Parser for the textual date rule notation.

Two spellings are accepted and may be mixed freely:

  * the canonical display form produced by ``str(rule)``, e.g.
    ``((12/25) previous year) + -4 Sundays``
  * constructor aliases, e.g.
    ``OffsetSundays(PreviousYear(Fixed(12, 25)), -4)``

Commas and parentheses nested inside an argument never split it.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Tuple

from litcal.core.errors import DateRuleParseError
from litcal.rules.date_rule import (
    AvoidSunday,
    DateRule,
    DivinoAfflatuAnticipation,
    Easter,
    Fixed,
    LeapYearConditional,
    NextYear,
    OffsetDays,
    OffsetSundays,
    PreviousYear,
    SundayBetweenOrFallback,
)

_INT_RE = re.compile(r"^[+-]?\d+$")
_MONTH_DAY_RE = re.compile(r"^(\d{1,2})\s*/\s*(\d{1,2})$")
_CALL_RE = re.compile(r"^([A-Za-z]+)\s*\(")
_OFFSET_RE = re.compile(r"^\+\s*([+-]?\d+)\s+(days|Sundays)$")
_AVOID_SUNDAY_SUFFIXES = ("(transfered on sundays)", "(transferred on sundays)")


def _matching_paren(s: str, start: int) -> int:
    """Index of the ')' closing the '(' at s[start]."""
    depth = 0
    for i in range(start, len(s)):
        c = s[i]
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return i
    raise DateRuleParseError("Unbalanced parentheses", s[start:])


def _split_args(s: str) -> List[str]:
    """Split on commas at parenthesis depth 0."""
    parts: List[str] = []
    depth = 0
    start = 0
    for i, c in enumerate(s):
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth < 0:
                raise DateRuleParseError("Unbalanced parentheses", s)
        elif c == "," and depth == 0:
            parts.append(s[start:i].strip())
            start = i + 1
    if depth != 0:
        raise DateRuleParseError("Unbalanced parentheses", s)
    parts.append(s[start:].strip())
    return parts


def _parse_int(s: str) -> int:
    s = s.strip()
    if not _INT_RE.match(s):
        raise DateRuleParseError("Expected an integer", s)
    return int(s)


def _fixed(month: int, day: int, fragment: str) -> Fixed:
    try:
        return Fixed(month, day)
    except ValueError as e:
        raise DateRuleParseError(str(e), fragment) from e


def _group(s: str, pos: int) -> Tuple[str, int]:
    """Read a '( ... )' group starting at s[pos]; returns (inner text, index after it)."""
    if pos >= len(s) or s[pos] != "(":
        raise DateRuleParseError("Expected '('", s[pos:])
    end = _matching_paren(s, pos)
    return s[pos + 1:end], end + 1


def _expect(s: str, pos: int, word: str) -> int:
    rest = s[pos:].lstrip()
    if not rest.startswith(word):
        raise DateRuleParseError(f"Expected '{word}'", s[pos:])
    return len(s) - len(rest) + len(word)


# ============================================================
# Constructor aliases
# ============================================================

def _arity(name: str, args: List[str], n: int, fragment: str) -> None:
    if len(args) != n or any(a == "" for a in args):
        raise DateRuleParseError(f"{name} takes {n} argument(s)", fragment)


def _call_fixed(args: List[str], fragment: str) -> DateRule:
    _arity("Fixed", args, 2, fragment)
    return _fixed(_parse_int(args[0]), _parse_int(args[1]), fragment)


def _call_offset_days(args: List[str], fragment: str) -> DateRule:
    _arity("OffsetDays", args, 2, fragment)
    return OffsetDays(parse(args[0]), _parse_int(args[1]))


def _call_offset_sundays(args: List[str], fragment: str) -> DateRule:
    _arity("OffsetSundays", args, 2, fragment)
    return OffsetSundays(parse(args[0]), _parse_int(args[1]))


def _call_previous_year(args: List[str], fragment: str) -> DateRule:
    _arity("PreviousYear", args, 1, fragment)
    return PreviousYear(parse(args[0]))


def _call_next_year(args: List[str], fragment: str) -> DateRule:
    _arity("NextYear", args, 1, fragment)
    return NextYear(parse(args[0]))


def _call_sunday_between(args: List[str], fragment: str) -> DateRule:
    _arity("SundayBetweenOrFallback", args, 3, fragment)
    return SundayBetweenOrFallback(parse(args[0]), parse(args[1]), parse(args[2]))


def _call_leap_year(args: List[str], fragment: str) -> DateRule:
    _arity("LeapYearConditional", args, 2, fragment)
    return LeapYearConditional(parse(args[0]), parse(args[1]))


def _call_avoid_sunday(args: List[str], fragment: str) -> DateRule:
    _arity("AvoidSunday", args, 1, fragment)
    return AvoidSunday(parse(args[0]))


_CALLS: Dict[str, Callable[[List[str], str], DateRule]] = {
    "Fixed": _call_fixed,
    "OffsetDays": _call_offset_days,
    "OffsetSundays": _call_offset_sundays,
    "PreviousYear": _call_previous_year,
    "NextYear": _call_next_year,
    "SundayBetweenOrFallback": _call_sunday_between,
    "LeapYearConditional": _call_leap_year,
    "AvoidSunday": _call_avoid_sunday,
}


# ============================================================
# Display form
# ============================================================

def _parse_postfix(inner: DateRule, rest: str, fragment: str) -> DateRule:
    m = _OFFSET_RE.match(rest)
    if m:
        n = int(m.group(1))
        return OffsetDays(inner, n) if m.group(2) == "days" else OffsetSundays(inner, n)
    if rest == "previous year":
        return PreviousYear(inner)
    if rest == "next year":
        return NextYear(inner)
    if rest in _AVOID_SUNDAY_SUFFIXES:
        return AvoidSunday(inner)
    if rest.startswith("in leap year else"):
        tail = rest[len("in leap year else"):].strip()
        if not tail.startswith("("):
            raise DateRuleParseError("Expected '(' after 'else'", fragment)
        other, end = _group(tail, 0)
        if tail[end:].strip():
            raise DateRuleParseError("Trailing text", tail[end:])
        return LeapYearConditional(inner, parse(other))
    raise DateRuleParseError("Unknown rule suffix", rest)


def _parse_sunday_between(s: str) -> DateRule:
    pos = _expect(s, 0, "Sunday Between")
    pos = len(s) - len(s[pos:].lstrip())
    start, pos = _group(s, pos)
    pos = _expect(s, pos, "and")
    pos = len(s) - len(s[pos:].lstrip())
    end, pos = _group(s, pos)
    pos = _expect(s, pos, "or")
    pos = len(s) - len(s[pos:].lstrip())
    fallback, pos = _group(s, pos)
    if s[pos:].strip():
        raise DateRuleParseError("Trailing text", s[pos:])
    return SundayBetweenOrFallback(parse(start), parse(end), parse(fallback))


def parse(text: str) -> DateRule:
    """Parse a date rule; raises DateRuleParseError naming the offending fragment."""
    s = text.strip()
    if not s:
        raise DateRuleParseError("Empty date rule", text)

    if s == "Easter":
        return Easter()
    if s == "DivinoAfflatuAnticipation":
        return DivinoAfflatuAnticipation()

    m = _MONTH_DAY_RE.match(s)
    if m:
        return _fixed(int(m.group(1)), int(m.group(2)), s)

    if s.startswith("("):
        end = _matching_paren(s, 0)
        inner = parse(s[1:end])
        rest = s[end + 1:].strip()
        if not rest:
            return inner
        return _parse_postfix(inner, rest, s)

    if s.startswith("Sunday Between"):
        return _parse_sunday_between(s)

    m = _CALL_RE.match(s)
    if m:
        name = m.group(1)
        if name not in _CALLS:
            raise DateRuleParseError("Unknown rule", name)
        open_at = m.end() - 1
        close_at = _matching_paren(s, open_at)
        if s[close_at + 1:].strip():
            raise DateRuleParseError("Trailing text", s[close_at + 1:])
        body = s[open_at + 1:close_at]
        args = _split_args(body) if body.strip() else []
        return _CALLS[name](args, s)

    raise DateRuleParseError("Unknown rule", s)
