# engine/normalize.py
"""
Text canonicalization for serialized formulas.

Works directly on the serializer's grammar (tokens, ``( )``, ``sqrt(...)``,
``/``, ``*``, ``+``/``-``, ``^2``). Canonical form absorbs reordering of multiplicative
factors and whitespace, with every factor sign gathered at the front of its
term; additive order is kept as written.
Malformed text never raises, it comes back whitespace-stripped.
"""

from __future__ import annotations

import re
from typing import List, Tuple

_WS = re.compile(r"\s+")

# a +/- right after one of these is a sign, not a binary operator
_UNARY_CONTEXT = "*/+-(^"


def _is_balanced(s: str) -> bool:
    depth = 0
    for ch in s:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def _closing(s: str, start: int) -> int:
    depth = 0
    for i in range(start, len(s)):
        if s[i] == "(":
            depth += 1
        elif s[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _top_level(s: str, ops: str) -> List[int]:
    """Positions of ``ops`` characters outside any parentheses."""
    out: List[int] = []
    depth = 0
    for i, ch in enumerate(s):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif depth == 0 and ch in ops:
            out.append(i)
    return out


def _split_at(s: str, cuts: List[int]) -> List[str]:
    parts, prev = [], 0
    for i in cuts:
        parts.append(s[prev:i])
        prev = i + 1
    parts.append(s[prev:])
    return parts


# --- Steps ------------------------------------------------------------------------


def _normalize_groups(s: str) -> str:
    # Recursion reaches the innermost groups first; each is rewritten in place.
    out: List[str] = []
    i = 0
    while i < len(s):
        if s[i] == "(":
            end = _closing(s, i)
            out.append(f"({_normalize(s[i + 1 : end])})")
            i = end + 1
        else:
            out.append(s[i])
            i += 1
    return "".join(out)


def _unsigned(factor: str) -> Tuple[int, str]:
    i = 0
    while i < len(factor) and factor[i] in "+-":
        i += 1
    return factor[:i].count("-"), factor[i:]


def _normalize_product(s: str) -> str:
    # Signs on any factor move to the front of the term, so a*-c and -c*a agree.
    negatives = 0
    factors: List[str] = []
    for factor in _split_at(s, _top_level(s, "*")):
        n, bare = _unsigned(factor)
        negatives += n
        factors.append(bare)
    sign = "-" if negatives % 2 else ""
    return sign + "*".join(sorted(factors))


def _normalize_terms(s: str, cuts: List[int]) -> str:
    out: List[str] = []
    prev = 0
    for i in cuts:
        out.append(_normalize_product(s[prev:i]))
        out.append(s[i])
        prev = i + 1
    out.append(_normalize_product(s[prev:]))
    return "".join(out)


def _additive_cuts(s: str) -> List[int]:
    return [i for i in _top_level(s, "+-") if i > 0 and s[i - 1] not in _UNARY_CONTEXT]


def _normalize(s: str) -> str:
    if not s:
        return s
    s = _normalize_groups(s)

    if s.startswith("sqrt(") and _closing(s, 4) == len(s) - 1:
        return f"sqrt({_normalize(s[5:-1])})"

    slashes = _top_level(s, "/")
    if slashes:
        cut = slashes[0]
        return f"{_normalize(s[:cut])}/{_normalize(s[cut + 1 :])}"

    cuts = _additive_cuts(s)
    if cuts:
        return _normalize_terms(s, cuts)
    return _normalize_product(s)


# --- Public API -------------------------------------------------------------------


def normalize_side(text: str) -> str:
    s = _WS.sub("", text or "")
    if not _is_balanced(s):
        return s
    return _normalize(s)


def normalize_formula(formula: str) -> str:
    """
    Canonical ``lhs=rhs`` text. The left-hand side names the target variable
    and is only whitespace-stripped; the right-hand side is normalized.
    Anything without exactly one ``=`` is returned whitespace-stripped.
    """
    stripped = _WS.sub("", formula or "")
    if stripped.count("=") != 1:
        return stripped
    lhs, rhs = stripped.split("=")
    return f"{lhs}={normalize_side(rhs)}"
