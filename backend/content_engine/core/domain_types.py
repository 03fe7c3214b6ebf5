"""Domain Types — enums and value types shared across handlers.

Invariants:
    - ReliabilityScore is bounded 0.0–1.0
    - All valid categories encoded as Enums — no raw string matching in handlers

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


ReliabilityScore = NewType("ReliabilityScore", float)   # 0.0–1.0


class StatementCategory(str, Enum):
    """Category assigned to each analysed statement."""
    FACTUAL = "factual"
    SUBJECTIVE = "subjective"
    SPECULATIVE = "speculative"
    UNCERTAIN = "uncertain"


class OutputType(str, Enum):
    """Kinds of document the drafting engine can produce."""
    PRESS_RELEASE = "press_release"
    INVESTMENT_NOTE = "investment_note"
    LINKEDIN_POST = "linkedin_post"
    TRANSACTION_TEXT = "transaction_text"


class Scenario(str, Enum):
    """Deal scenarios with dedicated drafting guidance."""
    NEW_INVESTMENT = "new_investment"
    EXIT_REALISATION = "exit_realisation"
    PORTFOLIO_UPDATE = "portfolio_update"


class QuestionKind(str, Enum):
    """Classification of a user question about a draft."""
    PUBLIC_INFO = "public_info"
    VERIFICATION = "verification"
    MEANING = "meaning"
    GENERAL = "general"


def clamp_reliability(value: float) -> ReliabilityScore:
    """Clamp to [0, 1]."""
    return ReliabilityScore(max(0.0, min(1.0, value)))
