import re
import unicodedata
from typing import Dict, List, Optional, Set, Tuple

from rapidfuzz.distance import Levenshtein

from ghostbill.domain.models.enums.category import ExpenseCategory

# Display names as they should appear to the user. Categorizer seeds and
# display-name autocorrect are both derived from this table.
CANONICAL_SEEDS: Dict[ExpenseCategory, List[str]] = {
    ExpenseCategory.coffee: [
        "Starbucks", "Tim Hortons", "Dunkin", "Blue Bottle", "Philz Coffee", "Peet's Coffee",
        "Blenz Coffee", "JJ Bean", "Caffè Nero",
    ],
    ExpenseCategory.dining: [
        "McDonald's", "Chipotle", "Subway", "Pizza Hut", "Domino's", "KFC", "Five Guys", "Sweetgreen",
        "Earls", "Cactus Club", "JOEY", "Nando's", "Poke", "Sushi",
    ],
    ExpenseCategory.groceries: [
        "Whole Foods", "Safeway", "Trader Joe's", "No Frills", "Loblaws", "Real Canadian Superstore",
        "Save-On-Foods", "IGA", "Walmart Supercentre", "Costco Wholesale",
    ],
    ExpenseCategory.fuel: [
        "Shell", "Chevron", "Petro-Canada", "Esso", "Mobil", "BP", "76", "Circle K", "ChargePoint",
        "EVgo", "Electrify America",
    ],
    ExpenseCategory.transport: [
        "Uber", "Lyft", "Yellow Cab", "BC Transit", "TransLink", "Compass", "VIA Rail", "Amtrak",
        "PayByPhone", "ParkMobile", "Zipcar",
    ],
    ExpenseCategory.shopping: [
        "Amazon", "Best Buy", "Walmart", "Target", "Apple Store", "Microsoft Store", "IKEA", "Home Depot",
        "Canadian Tire", "Sport Chek", "Sunglass Hut", "Zara", "H&M", "Uniqlo",
    ],
    ExpenseCategory.utilities: [
        "Xfinity", "Comcast", "Verizon", "T-Mobile", "AT&T", "Rogers", "Bell", "Telus", "Shaw",
        "Hydro One", "BC Hydro", "FortisBC", "Enbridge",
    ],
    ExpenseCategory.housing: [
        "Airbnb", "HOA", "Strata", "Property Management", "Landlord", "Rent Payment", "Mortgage",
    ],
    ExpenseCategory.entertainment: [
        "AMC", "Cinemark", "Cineplex", "Ticketmaster", "StubHub", "Netflix", "Spotify", "Disney",
        "PlayStation", "Xbox", "Steam",
    ],
    ExpenseCategory.travel: [
        "Delta", "United", "Air Canada", "WestJet", "Alaska Airlines", "American Airlines", "Marriott",
        "Hilton", "Hyatt", "IHG", "Hertz", "Avis", "Budget", "Enterprise",
    ],
    ExpenseCategory.other: [],
}

AUTOCORRECT_THRESHOLD = 0.82

_NON_NAME_CHARS = re.compile(r"[^a-z0-9&+ ]")
_STORE_ID = re.compile(r"(?:^|\s)(?:store|unit|no\.?|#)\s*\d+\b")
_TRAILING_ID = re.compile(r"\b\d{3,6}\b$")
_SPACES = re.compile(r"\s{2,}")


def normalize_merchant(name: Optional[str]) -> str:
    """
    Canonical lookup key for a merchant name.

    Lowercases, folds accents, turns punctuation other than & and + into
    spaces and drops store or unit numbers ("store 7038", "no 12", a trailing
    3-6 digit id), then collapses whitespace. "Starbucks #1234" and
    "STARBUCKS" both become "starbucks".
    """
    out = unicodedata.normalize("NFKD", (name or "").lower())
    out = "".join(ch for ch in out if not unicodedata.combining(ch))
    out = _NON_NAME_CHARS.sub(" ", out)
    out = _STORE_ID.sub("", out).strip()
    out = _TRAILING_ID.sub("", out)
    return _SPACES.sub(" ", out).strip()


def _build_indexes() -> Tuple[Dict[ExpenseCategory, Set[str]], Dict[str, str]]:
    by_category: Dict[ExpenseCategory, Set[str]] = {}
    canonical: Dict[str, str] = {}
    for category, names in CANONICAL_SEEDS.items():
        keys = set()
        for display in names:
            key = normalize_merchant(display)
            if not key:
                continue
            keys.add(key)
            # first display form wins when two normalize alike
            canonical.setdefault(key, display)
        by_category[category] = keys
    return by_category, canonical


NORMALIZED_BY_CATEGORY, CANONICAL_BY_NORMALIZED = _build_indexes()


def fuzzy_match(a: str, b: str) -> bool:
    """Substring either way, or an edit distance small enough to be an OCR slip."""
    if a == b or a in b or b in a:
        return True
    limit = max(1, min(3, max(len(a), len(b)) // 6))
    return Levenshtein.distance(a, b) <= limit


def similarity(a: str, b: str) -> float:
    """Token overlap (Jaccard, weight 0.6) plus edit similarity (weight 0.4), in [0, 1]."""
    if a == b:
        return 1.0
    a_tokens, b_tokens = a.split(), b.split()
    union = set(a_tokens) | set(b_tokens)
    jaccard = len(set(a_tokens) & set(b_tokens)) / len(union) if union else 0.0
    edit = 1.0 - Levenshtein.distance(a, b) / max(1, len(a), len(b))

    score = 0.6 * jaccard + 0.4 * edit
    if a_tokens and b_tokens and a_tokens[0][:3] == b_tokens[0][:3]:
        score += 0.03
    return min(score, 1.0)


def _candidates(key: str) -> List[str]:
    tokens = set(key.split())
    out = []
    for seed in CANONICAL_BY_NORMALIZED:
        if not tokens & set(seed.split()):
            continue
        if min(len(key), len(seed)) / max(len(key), len(seed)) >= 0.5:
            out.append(seed)
    return out


def autocorrect(name: Optional[str]) -> Optional[Tuple[str, int]]:
    """
    Canonical display name for a misread merchant and a 0-10 confidence.

    Returns None unless the name is a known seed or a seed sharing at least
    one word scores at least AUTOCORRECT_THRESHOLD on `similarity`.
    """
    key = normalize_merchant(name)
    if not key:
        return None
    if key in CANONICAL_BY_NORMALIZED:
        return CANONICAL_BY_NORMALIZED[key], 10

    best, best_score = None, 0.0
    for seed in sorted(_candidates(key)):
        score = similarity(key, seed)
        if score > best_score:
            best, best_score = seed, score

    if best is None or best_score < AUTOCORRECT_THRESHOLD:
        return None
    return CANONICAL_BY_NORMALIZED[best], int(round(best_score * 10))
