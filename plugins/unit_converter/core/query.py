"""Parse free-text conversion requests such as ``"10 km to mi"``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Tuple

from .catalog import CATEGORIES
from .converter import BadInputError, InvalidUnitError

_STOP_WORDS = (
    "how much is",
    "how many",
    "what is",
    "what's",
    "convert",
    "please",
    "calculate",
)
_QUERY_PATTERN = re.compile(
    r"^(?P<value>[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[-+]?\d+)?)\s*"
    r"(?P<source>.+?)\s+(?:to|into|in)\s+(?P<target>.+?)$",
    re.IGNORECASE,
)
_SUPERSCRIPTS = str.maketrans({"²": "2", "³": "3"})


@dataclass(frozen=True)
class ParsedQuery:
    value: float
    from_unit: str
    to_unit: str
    category: str


Candidate = Tuple[str, str]  # (category name, unit symbol)


@lru_cache(maxsize=1)
def _alias_index() -> Tuple[Dict[str, List[Candidate]], Dict[str, List[Candidate]]]:
    exact: Dict[str, List[Candidate]] = {}
    loose: Dict[str, List[Candidate]] = {}
    for category in CATEGORIES.values():
        for unit in category.units:
            entry = (category.name, unit.symbol)
            exact.setdefault(unit.symbol, []).append(entry)
            keys = {unit.symbol, unit.name, f"{unit.name}s", *unit.aliases}
            for key in keys:
                bucket = loose.setdefault(_normalise(key), [])
                if entry not in bucket:
                    bucket.append(entry)
    return exact, loose


def _normalise(text: str) -> str:
    collapsed = re.sub(r"\s+", " ", text.strip().lower())
    return collapsed.translate(_SUPERSCRIPTS).replace("μ", "µ")


def _candidates(token: str) -> List[Candidate]:
    exact, loose = _alias_index()
    token = token.strip().rstrip("?.!")
    if token in exact:
        return exact[token]
    found = loose.get(_normalise(token))
    if not found:
        raise InvalidUnitError(f"Unknown unit '{token}'.")
    return found


def _strip_stop_words(text: str) -> str:
    lowered = text.strip()
    changed = True
    while changed:
        changed = False
        for word in _STOP_WORDS:
            if lowered.lower().startswith(word + " "):
                lowered = lowered[len(word) :].lstrip()
                changed = True
    return lowered


def parse_query(query: str) -> ParsedQuery:
    """Split ``query`` into value, units and the category they share."""

    if not isinstance(query, str) or not query.strip():
        raise BadInputError("Query must be a non-empty string.")
    text = _strip_stop_words(query).rstrip("?").strip()
    match = _QUERY_PATTERN.match(text)
    if match is None:
        raise BadInputError(
            "Query must look like '<value> <unit> to <unit>', e.g. '10 km to mi'."
        )
    value = float(match.group("value"))
    sources = _candidates(match.group("source"))
    targets = _candidates(match.group("target"))
    target_by_category = {name: symbol for name, symbol in targets}
    for category_name, source_symbol in sources:
        if category_name in target_by_category:
            return ParsedQuery(
                value=value,
                from_unit=source_symbol,
                to_unit=target_by_category[category_name],
                category=category_name,
            )
    raise InvalidUnitError(
        f"'{match.group('source').strip()}' and '{match.group('target').strip()}' "
        "do not belong to the same category."
    )


__all__ = ["ParsedQuery", "parse_query"]
