from __future__ import annotations

import re

# Declaration order matters: first-match detection walks this mapping top to bottom
# and best-match detection breaks ties in favour of the earlier category.
SERVICE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "plumbing": ("plumber", "pipe", "leak", "drain", "water", "plumbing", "toilet", "sink", "faucet", "bathroom"),
    "cleaning": ("clean", "cleaning", "house clean", "office clean", "deep clean", "maid", "housekeeping"),
    "electrical": ("electrician", "wiring", "electrical", "power", "socket", "electric", "lights", "electricity"),
    "beauty": ("makeup", "hair", "beauty", "manicure", "facial", "styling", "salon", "spa", "nails"),
    "carpentry": ("carpenter", "furniture", "wood", "cabinet", "door", "repair", "woodwork", "table", "chair"),
    "tutoring": ("tutor", "teach", "math", "science", "study", "lesson", "education", "homework"),
    "masonry": ("mason", "stone", "brick", "wall", "foundation", "concrete", "masonry", "stonework", "construction"),
}

NAIROBI_AREAS: tuple[str, ...] = (
    "westlands",
    "karen",
    "cbd",
    "kilimani",
    "kasarani",
    "embakasi",
    "lavington",
    "kileleshwa",
    "runda",
    "muthaiga",
    "gigiri",
    "spring valley",
    "riverside",
    "parklands",
    "eastleigh",
    "south c",
    "south b",
    "langata",
    "adams arcade",
    "ngong road",
    "thika road",
    "mombasa road",
    "upper hill",
    "hurlingham",
    "kahawa",
    "ruaka",
    "rongai",
)

LOCATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(" + "|".join(re.escape(area) for area in NAIROBI_AREAS) + r")\b", re.IGNORECASE),
    re.compile(r"\b(?:in|at|near|around)\s+([a-z]+)", re.IGNORECASE),
    re.compile(r"\b([a-z]+)\s+area\b", re.IGNORECASE),
)

# Words that follow "in"/"at" without naming a place ("in the morning", "at home").
LOCATION_FILLER_WORDS = frozenset(
    {
        "a",
        "an",
        "the",
        "my",
        "our",
        "your",
        "his",
        "her",
        "their",
        "this",
        "that",
        "least",
        "once",
        "all",
        "home",
        "house",
        "office",
        "work",
        "time",
        "general",
        "advance",
        "need",
        "which",
        "what",
        "any",
        "some",
    }
)

URGENCY_KEYWORDS = ("urgent", "emergency", "asap", "immediately", "now", "today", "quick")

GREETING_WORDS = frozenset({"hello", "hi", "hey", "start", "jambo", "habari", "mambo", "sasa"})

PRICING_KEYWORDS = ("price", "cost", "rate", "charge", "how much")

HELP_KEYWORDS = ("help", "support")

BOOKING_KEYWORDS = ("book", "appointment", "schedule")

BUDGET_PATTERN = re.compile(r"\b(?:budget|price|cost|pay|spend)\D*?(\d[\d,]*)", re.IGNORECASE)

SELECTION_PATTERN = re.compile(r"[0-9]+")

BOOK_NUMBER_PATTERN = re.compile(r"\bbook\s+#?([0-9]+)\b", re.IGNORECASE)


def normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "").lower()).strip()


def contains_keyword(normalized: str, keyword: str, word_start: bool = False) -> bool:
    """
    True if `keyword` occurs anywhere in `normalized`.

    Plain substring matching, so "outdrain" hits "drain" and "know" hits "now".
    With `word_start` the keyword must begin a word: "pipes" still matches
    "pipe", but "chair" no longer matches "hair".
    """
    if not word_start:
        return keyword in normalized
    return re.search(r"(?<![a-z0-9])" + re.escape(keyword), normalized) is not None


def matched_keywords(normalized: str, keywords: tuple[str, ...], word_start: bool = False) -> list[str]:
    return [keyword for keyword in keywords if contains_keyword(normalized, keyword, word_start)]


def has_any_keyword(normalized: str, keywords: tuple[str, ...], word_start: bool = False) -> bool:
    return any(contains_keyword(normalized, keyword, word_start) for keyword in keywords)


def is_greeting(normalized: str) -> bool:
    words = re.findall(r"[a-z]+", normalized)
    return any(word in GREETING_WORDS for word in words)


def is_urgent(normalized: str, word_start: bool = False) -> bool:
    return has_any_keyword(normalized, URGENCY_KEYWORDS, word_start)


def is_selection(text: str) -> bool:
    return SELECTION_PATTERN.fullmatch((text or "").strip()) is not None


def extract_location(text: str) -> str | None:
    """Return the first place name found, keeping the user's casing."""
    for pattern in LOCATION_PATTERNS:
        for match in pattern.finditer(text or ""):
            candidate = match.group(1).strip()
            if candidate and candidate.lower() not in LOCATION_FILLER_WORDS:
                return candidate
    return None


def extract_budget(text: str) -> int | None:
    match = BUDGET_PATTERN.search(text or "")
    if not match:
        return None
    digits = match.group(1).replace(",", "")
    if not digits:
        return None
    value = int(digits)
    return value if value > 0 else None


def extract_booking_number(text: str) -> int | None:
    match = BOOK_NUMBER_PATTERN.search(text or "")
    return int(match.group(1)) if match else None
