"""Pattern-based intent classification.

``classify`` walks ``INTENT_RULES`` in order and returns the first
intent a rule produces, falling back to ``Fallback()``.  The order is
part of the contract: a greeting that mentions a product is still a
greeting, and "compare ... price ..." is a comparison, not a lookup.
"""

import re
from typing import Callable, Optional

from .models import Compare, Fallback, Greeting, Intent, ProductQuery
from .normalizer import normalize

GREETINGS: tuple[str, ...] = (
    "hi",
    "hello",
    "hey",
    "good morning",
    "good afternoon",
    "good evening",
)

# Left side is non-greedy, so the first separator wins: for
# "compare salt and pepper grinder and mill" left is "salt".
_COMPARE = re.compile(
    r"\bcompare\s+(?P<left>.+?)\s+(?:and|vs\.?|v)\s+(?P<right>.+?)[\s.!?]*$",
    re.IGNORECASE,
)

QUERY_TRIGGERS: tuple[str, ...] = (
    "tell me about",
    "about",
    "details",
    "specs",
    "price",
    "battery",
    "ram",
    "storage",
    "rating",
    "what is",
)

_PRODUCT_QUERY = re.compile(
    r"\b(?:" + "|".join(re.escape(t) for t in QUERY_TRIGGERS) + r")\s+\S.*",
    re.IGNORECASE | re.DOTALL,
)

IntentRule = Callable[[str], Optional[Intent]]


def match_greeting(raw: str) -> Optional[Greeting]:
    text = normalize(raw)
    if any(text == g or text.startswith(g + " ") for g in GREETINGS):
        return Greeting()
    return None


def match_compare(raw: str) -> Optional[Compare]:
    match = _COMPARE.search(raw)
    if match is None:
        return None
    left, right = match.group("left").strip(), match.group("right").strip()
    if not left or not right:
        return None
    return Compare(left=left, right=right)


def match_product_query(raw: str) -> Optional[ProductQuery]:
    match = _PRODUCT_QUERY.search(raw)
    if match is None:
        return None
    return ProductQuery(query=match.group(0).strip())


INTENT_RULES: tuple[IntentRule, ...] = (
    match_greeting,
    match_compare,
    match_product_query,
)


def classify(raw: str) -> Intent:
    """Map a raw user message to exactly one intent."""
    for rule in INTENT_RULES:
        intent = rule(raw)
        if intent is not None:
            return intent
    return Fallback()
