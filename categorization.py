"""Transaction categorization: keyword rules first, LLM fallback second.

A description is matched against a fixed, ordered rule table. The first rule
with a keyword contained in the lowercased description decides the category.
Only when no rule matches is the LLM asked, and any failure on that path
degrades to "Other" at confidence 30 so ingestion never blocks on the model.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from llm.parsing import extract_json_text
from llm.providers.base import LLMProvider
from logger import get_logger
from models.classification import ClassificationResult, clamp_confidence
from models.transaction import Transaction

logger = get_logger()

FALLBACK_CATEGORY = "Other"
FALLBACK_CONFIDENCE = 30


@dataclass(frozen=True)
class CategoryRule:
    """Keyword fragments mapped to a category with a fixed confidence."""

    keywords: Tuple[str, ...]
    category: str
    confidence: int

    def matches(self, lowered_description: str) -> bool:
        return any(keyword in lowered_description for keyword in self.keywords)


# Order matters: the first matching rule wins.
CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(
        ("swiggy", "zomato", "food", "restaurant", "cafe", "pizza", "burger"),
        "Food & Dining",
        95,
    ),
    CategoryRule(
        ("uber", "ola", "taxi", "bus", "metro", "petrol", "fuel", "transport"),
        "Transportation",
        95,
    ),
    CategoryRule(
        ("amazon", "flipkart", "shopping", "mall", "store", "purchase"),
        "Shopping",
        90,
    ),
    CategoryRule(
        ("movie", "cinema", "netflix", "spotify", "entertainment", "game"),
        "Entertainment",
        90,
    ),
    CategoryRule(
        ("electricity", "water", "gas", "internet", "mobile", "bill", "utility"),
        "Bills & Utilities",
        95,
    ),
    CategoryRule(
        ("hospital", "doctor", "medicine", "pharmacy", "health"),
        "Healthcare",
        90,
    ),
    CategoryRule(
        ("school", "college", "course", "book", "education"),
        "Education",
        90,
    ),
    CategoryRule(("salary", "income", "bonus", "freelance"), "Income", 95),
)

CATEGORY_NAMES: Tuple[str, ...] = tuple(rule.category for rule in CATEGORY_RULES) + (
    FALLBACK_CATEGORY,
)


def match_rule(description: str) -> Optional[ClassificationResult]:
    """Return the first rule's decision for a description, or None."""
    lowered = description.lower()
    for rule in CATEGORY_RULES:
        if rule.matches(lowered):
            return ClassificationResult(rule.category, rule.confidence)
    return None


class _CategoryReply(BaseModel):
    category: str
    confidence: float = Field(allow_inf_nan=False)


def default_classification() -> ClassificationResult:
    return ClassificationResult(FALLBACK_CATEGORY, FALLBACK_CONFIDENCE)


class FallbackClassifier:
    """Asks the LLM for a category when no rule applies."""

    def __init__(self, provider: Optional[LLMProvider]):
        self.provider = provider

    def classify(self, description: str) -> ClassificationResult:
        """Classify a description with one LLM call.

        Never raises: provider errors, unparsable replies and missing fields
        all yield the default ("Other", 30).
        """
        if self.provider is None:
            logger.debug("No LLM provider - using default category")
            return default_classification()

        try:
            reply = self.provider.complete(
                "categorization",
                {
                    "categories": ", ".join(f"'{name}'" for name in CATEGORY_NAMES),
                    "description": description,
                },
            )
        except Exception as e:
            logger.error(f"LLM categorization failed: {e}")
            return default_classification()

        try:
            parsed = _CategoryReply.model_validate_json(extract_json_text(reply))
        except ValueError as e:
            logger.warning(f"Unparsable categorization reply {reply!r}: {e}")
            return default_classification()

        confidence = clamp_confidence(parsed.confidence)
        category = parsed.category.strip()
        if category not in CATEGORY_NAMES:
            logger.warning(f"LLM suggested unknown category '{category}'")
            category = FALLBACK_CATEGORY

        return ClassificationResult(category, confidence)


class TransactionCategorizer:
    """Two-tier categorizer: rule table, then the fallback classifier.

    Args:
        provider: Shared LLM provider, or None when LLM features are disabled.
        workers: Maximum concurrent fallback calls for batch categorization.
    """

    def __init__(self, provider: Optional[LLMProvider], workers: int = 1):
        self.fallback = FallbackClassifier(provider)
        self.workers = max(1, workers)

    def categorize(self, description: str) -> ClassificationResult:
        """Return exactly one category decision for a description."""
        result = match_rule(description)
        if result is not None:
            return result
        return self.fallback.classify(description)

    def categorize_transactions(
        self, transactions: List[Transaction]
    ) -> List[Transaction]:
        """Categorize transactions in place.

        Each transaction that is categorized gets its category, confidence and
        status ("categorized") set. A row that fails keeps its current values.

        Args:
            transactions: Transactions to categorize.

        Returns:
            The same list of transactions.
        """
        if not transactions:
            return transactions

        logger.info(
            f"Categorizing {len(transactions)} transaction(s) "
            f"with {self.workers} worker(s)"
        )

        if self.workers == 1:
            for txn in transactions:
                self._categorize_one(txn)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                list(pool.map(self._categorize_one, transactions))

        categorized_count = sum(1 for t in transactions if t.status == "categorized")
        logger.info(
            f"Categorized {categorized_count}/{len(transactions)} transactions"
        )
        return transactions

    def _categorize_one(self, txn: Transaction) -> None:
        try:
            result = self.categorize(txn.description)
        except Exception as e:
            logger.error(f"Categorization failed for transaction {txn.id}: {e}")
            return

        txn.category = result.category
        txn.confidence = result.confidence
        txn.status = "categorized"
