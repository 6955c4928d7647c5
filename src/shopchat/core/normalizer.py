"""Message normalisation and product-phrase cleaning."""

import re

# Order matters: the alternation tries entries left to right, so longer
# phrases that share a prefix with a later entry win ("price of" before
# "price").
FILLER_PHRASES: tuple[str, ...] = (
    "tell me about",
    "tell me the",
    "tell me",
    "give me",
    "show me",
    "show",
    "details of",
    "details",
    "specs of",
    "specs",
    "specifications of",
    "specification of",
    "price of",
    "price",
    "battery of",
    "battery",
    "ram of",
    "ram",
    "storage of",
    "storage",
    "rating of",
    "rating",
    "what is",
    "what's",
    "what are",
    "what are the",
    "what are the specs of",
    "information about",
    "about",
    "of",
    "the",
    "please",
    "can you",
    "could you",
    "i want",
    "i need",
    "i'd like",
    "give details about",
    "give me details about",
    "show details of",
    "tell details of",
    "details for",
    "info about",
    "information on",
    "details on",
    "which is",
    "which are",
    "compare",
    "compare with",
    "compare to",
    "vs",
    "vs.",
    "and",
    "or",
)

_FILLER_PREFIX = re.compile(
    r"^(?:" + "|".join(re.escape(f) for f in FILLER_PHRASES) + r")\s+",
    re.IGNORECASE,
)
_PUNCTUATION = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")

MIN_MEANINGFUL_LENGTH = 2


def normalize(raw: str | None) -> str:
    """Lowercase and trim."""
    return (raw or "").strip().lower()


def strip_fillers(text: str) -> str:
    """Drop leading filler phrases until none matches.

    Every pass consumes at least one filler plus its trailing whitespace;
    the loop stops as soon as a pass fails to shrink the string.
    """
    while True:
        stripped = _FILLER_PREFIX.sub("", text, count=1).strip()
        if len(stripped) >= len(text):
            return text
        text = stripped


def clean_product_phrase(raw: str | None) -> str:
    """Reduce a free-text product question to a catalog search term.

    >>> clean_product_phrase("Price of Phone A?")
    'phone a'
    """
    text = strip_fillers(normalize(raw))
    text = _PUNCTUATION.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def is_meaningful(query: str | None) -> bool:
    """A query is searchable once it has at least two non-space characters."""
    if not query:
        return False
    return len(_WHITESPACE.sub("", query)) >= MIN_MEANINGFUL_LENGTH
