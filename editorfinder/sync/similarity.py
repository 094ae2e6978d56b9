"""Name similarity for matching crew names against existing editors."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_name(name: str) -> str:
    return _NON_ALNUM.sub("", name.lower().strip())


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit insert, delete and substitute costs."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (ca != cb),
            ))
        previous = current
    return previous[-1]


def name_similarity(first: str, second: str) -> float:
    """Return 1 - distance / longest length over normalized names, in [0, 1]."""
    a, b = normalize_name(first), normalize_name(second)
    if a == b:
        return 1.0
    longest = max(len(a), len(b))
    return (longest - levenshtein(a, b)) / longest
