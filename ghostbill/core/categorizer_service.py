import re
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException

from ghostbill.core import merchant_lexicon
from ghostbill.domain.models.dtos import CategorySuggestion, MerchantCorrection, MerchantOverrideOut
from ghostbill.domain.models.enums.category import ExpenseCategory
from ghostbill.infrastructure.persistence.merchant_override_repository import MerchantOverrideRepository
from ghostbill.core.log.logging_service import get_logger
logger = get_logger(__name__)

# Below this score the suggestion falls back to `other`
CONFIDENCE_THRESHOLD = 4
MAX_CONFIDENCE = 10

C = ExpenseCategory

# Generic words inside the merchant name
MERCHANT_CUES: Dict[ExpenseCategory, List[str]] = {
    C.coffee: ["coffee", "cafe", "caff", "espresso", "roasters"],
    C.dining: ["grill", "bistro", "restaurant", "kitchen", "bar", "pizza", "sushi", "burger", "noodle", "ramen", "taco"],
    C.groceries: ["market", "grocery", "foods", "supermarket", "produce"],
    C.fuel: ["gas", "fuel", "petro", "oil", "station", "charge"],
    C.transport: ["taxi", "cab", "transit", "metro", "bus", "train", "parking", "park"],
    C.shopping: ["store", "shop", "outlet", "mart", "depot"],
    C.utilities: ["hydro", "power", "electric", "water", "gas", "internet", "mobile", "cell", "wireless"],
    C.housing: ["rent", "hoa", "strata", "property", "management", "mortgage"],
    C.entertainment: ["cinema", "theatre", "theater", "ticket", "concert", "stream", "arcade"],
    C.travel: ["air", "hotel", "inn", "hostel", "car rental", "rent a car", "lodge"],
}

# Words in the receipt or note text
TEXT_TOKENS: Dict[ExpenseCategory, List[str]] = {
    C.coffee: ["latte", "espresso", "americano", "cappuccino", "mocha", "macchiato", "frappuccino", "cold brew", "drip", "flat white"],
    C.dining: ["tip", "gratuity", "table", "server", "dine in", "takeout"],
    C.groceries: ["produce", "bakery", "deli", "meat", "seafood", "grocery", "receipt subtotal"],
    C.fuel: ["litre", "liter", "gallon", "octane", "diesel", "unleaded", "pump", "kwh"],
    C.transport: ["ride", "trip", "fare", "parking", "toll", "metro", "bus", "train", "ticket"],
    C.shopping: ["sku", "warranty", "electronics", "apparel", "size", "model"],
    C.utilities: ["billing period", "account number", "statement", "kwh", "gb", "minutes", "usage", "service address"],
    C.housing: ["rent", "lease", "unit", "suite", "maintenance", "hoa", "strata", "due date"],
    C.entertainment: ["ticket", "showtime", "subscription", "pass", "season", "seat", "row"],
    C.travel: ["flight", "boarding", "gate", "pnr", "airline", "reservation", "hotel", "room", "check-in", "baggage", "itinerary"],
}

COFFEE_DRINKS = ["espresso", "latte", "americano", "cappuccino", "mocha", "macchiato", "flat white", "frappuccino", "cold brew", "drip"]

TRAVEL_STRONG_MERCHANTS = [
    "air canada", "westjet", "delta", "united", "american airlines", "alaska airlines",
    "marriott", "hilton", "hyatt", "ihg", "hertz", "avis", "budget", "enterprise",
]

_FUEL_WORDS = re.compile(r"\b(litre|liter|gallon|octane|diesel|unleaded|pump|kwh)\b")
_TRANSPORT_WORDS = re.compile(r"\b(ride|trip|fare|parking|toll|metro|bus|train)\b")
_UTILITY_UNITS = re.compile(r"\b(kwh|gb|min|data)\b")
_WEIGHED_LINE = re.compile(r"\bkg\b|\blb\b|\bsku\b")


def _add_merchant_scores(merchant: str, scores: Dict[ExpenseCategory, int]) -> None:
    for category, names in merchant_lexicon.NORMALIZED_BY_CATEGORY.items():
        if merchant in names:
            scores[category] += 10

    # One fuzzy hit per category is enough
    for category, names in merchant_lexicon.NORMALIZED_BY_CATEGORY.items():
        if any(name != merchant and merchant_lexicon.fuzzy_match(merchant, name) for name in names):
            scores[category] += 7

    for category, cues in MERCHANT_CUES.items():
        if any(cue in merchant for cue in cues):
            scores[category] += 4


def _add_keyword_scores(text: str, scores: Dict[ExpenseCategory, int]) -> None:
    for category, tokens in TEXT_TOKENS.items():
        hits = sum(1 for token in tokens if token in text)
        if hits:
            scores[category] += min(8, hits * 2)


def _add_format_cue_scores(text: str, scores: Dict[ExpenseCategory, int]) -> None:
    if "tip" in text or "gratuity" in text:
        scores[C.dining] += 4

    if _FUEL_WORDS.search(text):
        scores[C.fuel] += 4

    if any(cue in text for cue in ("billing period", "account number", "statement")) or _UTILITY_UNITS.search(text):
        scores[C.utilities] += 4

    if any(cue in text for cue in ("boarding", "gate ", "flight", "reservation", "check-in", "check in", "baggage")):
        scores[C.travel] += 4

    # Weighed or SKU'd line items read like a grocery receipt
    if sum(1 for line in text.splitlines() if _WEIGHED_LINE.search(line)) >= 2:
        scores[C.groceries] += 3


def _apply_tie_breakers(text: str, merchant: str, scores: Dict[ExpenseCategory, int]) -> None:
    if any(drink in text for drink in COFFEE_DRINKS):
        scores[C.coffee] += 2

    if _FUEL_WORDS.search(text):
        scores[C.fuel] += 1
    elif _TRANSPORT_WORDS.search(text):
        scores[C.transport] += 1

    if any(name in merchant for name in TRAVEL_STRONG_MERCHANTS):
        scores[C.travel] += 5


def score_categories(merchant_key: str, text: str) -> Dict[ExpenseCategory, int]:
    """Raw per-category scores for a normalized merchant and free text."""
    scores = {category: 0 for category in ExpenseCategory}
    lower = (text or "").lower()
    if merchant_key:
        _add_merchant_scores(merchant_key, scores)
    _add_keyword_scores(lower, scores)
    _add_format_cue_scores(lower, scores)
    _apply_tie_breakers(lower, merchant_key, scores)
    return scores


def suggest_category(merchant: Optional[str], text: str = "") -> CategorySuggestion:
    """
    Best category for a merchant name and receipt or note text.

    Confidence is the winning score capped at 10. A winning score below
    CONFIDENCE_THRESHOLD gives `other` with confidence 0-3. Ties go to the
    category declared first in ExpenseCategory.
    """
    key = merchant_lexicon.normalize_merchant(merchant)
    scores = score_categories(key, text)
    best = max(ExpenseCategory, key=lambda category: scores[category])
    score = scores[best]

    if score < CONFIDENCE_THRESHOLD:
        return CategorySuggestion(category=C.other, confidence=max(0, min(score, CONFIDENCE_THRESHOLD - 1)), merchant_key=key)
    return CategorySuggestion(category=best, confidence=min(MAX_CONFIDENCE, score), merchant_key=key)


class CategorizerService:
    """Category suggestions and merchant-name fixes, with per-user overrides."""

    def __init__(self, repo: Optional[MerchantOverrideRepository] = None):
        self.repo = repo or MerchantOverrideRepository()

    def suggest(self, user_id: UUID, merchant: Optional[str], text: str = "") -> CategorySuggestion:
        key = merchant_lexicon.normalize_merchant(merchant)
        override = self.repo.get(user_id, key) if key else None
        if override is not None and override.category:
            return CategorySuggestion(
                category=ExpenseCategory.from_text(override.category),
                confidence=MAX_CONFIDENCE,
                merchant_key=key,
                overridden=True,
            )
        return suggest_category(merchant, text)

    def autocorrect(self, user_id: UUID, merchant: Optional[str]) -> Optional[MerchantCorrection]:
        key = merchant_lexicon.normalize_merchant(merchant)
        if not key:
            return None
        override = self.repo.get(user_id, key)
        if override is not None and override.display_name:
            return MerchantCorrection(name=override.display_name, confidence=MAX_CONFIDENCE)
        fixed = merchant_lexicon.autocorrect(key)
        if fixed is None:
            return None
        return MerchantCorrection(name=fixed[0], confidence=fixed[1])

    # ---------- Overrides ----------

    def list_overrides(self, user_id: UUID) -> List[MerchantOverrideOut]:
        return [MerchantOverrideOut.model_validate(o) for o in self.repo.list(user_id)]

    def remember_category(self, user_id: UUID, merchant: str, category: ExpenseCategory) -> MerchantOverrideOut:
        key = self._key_or_422(merchant)
        logger.info(f"User {user_id}: merchant '{key}' -> {category.value}")
        return MerchantOverrideOut.model_validate(self.repo.upsert(user_id, key, {"category": category.value}))

    def remember_display_name(self, user_id: UUID, merchant: str, display_name: str) -> MerchantOverrideOut:
        key = self._key_or_422(merchant)
        display_name = (display_name or "").strip()
        if not display_name:
            raise HTTPException(status_code=422, detail="Display name must not be empty.")
        logger.info(f"User {user_id}: merchant '{key}' shown as '{display_name}'")
        return MerchantOverrideOut.model_validate(self.repo.upsert(user_id, key, {"display_name": display_name}))

    def forget(self, user_id: UUID, merchant: str) -> None:
        o = self.repo.get(user_id, self._key_or_422(merchant))
        if o is None:
            raise HTTPException(status_code=404, detail="Not found")
        self.repo.delete(o)

    @staticmethod
    def _key_or_422(merchant: Optional[str]) -> str:
        key = merchant_lexicon.normalize_merchant(merchant)
        if not key:
            raise HTTPException(status_code=422, detail="Merchant name has nothing to match on.")
        return key
