"""Investment risk-profile questionnaire and scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

AGGRESSIVE_MIN_SCORE: Final = 27
MODERATE_MIN_SCORE: Final = 18


@dataclass(frozen=True, slots=True)
class Option:
    label: str
    score: int


@dataclass(frozen=True, slots=True)
class Question:
    id: int
    text: str
    options: tuple[Option, ...]


def _options(high: str, mid: str, low: str) -> tuple[Option, ...]:
    return (Option(high, 3), Option(mid, 2), Option(low, 1))


QUESTIONS: Final[tuple[Question, ...]] = (
    Question(1, "What is your age?", _options("Under 30", "31-45", "Over 45")),
    Question(2, "What is your investment horizon?", _options("More than 10 years", "5-10 years", "Less than 5 years")),
    Question(3, "How would you describe your investment knowledge?", _options("Extensive", "Moderate", "Limited")),
    Question(
        4,
        "How would you react to a 20% drop in your investment value?",
        _options("I would buy more", "I would stay invested", "I would sell"),
    ),
    Question(
        5,
        "What is your primary investment goal?",
        _options("Wealth creation", "Balanced growth & safety", "Capital preservation"),
    ),
    Question(6, "How often do you review your investment portfolio?", _options("Quarterly", "Annually", "Rarely/Never")),
    Question(7, "How much of your annual income do you invest?", _options("> 20%", "10-20%", "< 10%")),
    Question(
        8,
        "How would you rate your ability to handle financial losses?",
        _options("High tolerance", "Moderate tolerance", "Low tolerance"),
    ),
    Question(9, "What percentage of your investments are in high-risk assets?", _options("> 50%", "20-50%", "< 20%")),
    Question(
        10,
        "What is your current financial situation?",
        _options("Stable, surplus income", "Manageable, break-even", "Tight, limited savings"),
    ),
)

QUESTIONS_BY_ID: Final[dict[int, Question]] = {question.id: question for question in QUESTIONS}


@dataclass(slots=True)
class RiskProfileResult:
    total_score: int
    answered: int
    category: str | None

    @property
    def is_complete(self) -> bool:
        return self.answered == len(QUESTIONS)


def categorize(total_score: int) -> str:
    if total_score >= AGGRESSIVE_MIN_SCORE:
        return "Aggressive"
    if total_score >= MODERATE_MIN_SCORE:
        return "Moderate"
    return "Conservative"


def score_risk_profile(answers: dict[int, int]) -> RiskProfileResult:
    """Sum the selected option scores; no answers means no category yet."""
    total = sum(answers.values())
    category = categorize(total) if answers else None
    return RiskProfileResult(total_score=total, answered=len(answers), category=category)
