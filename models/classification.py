"""Classification result produced by the transaction categorizer."""

from dataclasses import dataclass

MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100


def clamp_confidence(value: float) -> int:
    """Clamp a confidence score into [0, 100] and round it to an integer."""
    return int(round(min(max(float(value), MIN_CONFIDENCE), MAX_CONFIDENCE)))


@dataclass(frozen=True)
class ClassificationResult:
    """A single category decision.

    Attributes:
        category: Category label (e.g., "Food & Dining").
        confidence: Score in [0, 100].
    """

    category: str
    confidence: int

    def __post_init__(self):
        if not MIN_CONFIDENCE <= self.confidence <= MAX_CONFIDENCE:
            raise ValueError(f"confidence out of range: {self.confidence}")
