# footprint_engine/survey.py

from typing import FrozenSet, Literal

from pydantic import BaseModel, ConfigDict, StrictBool

from .constants import BONUS_MAX, BONUS_STEP, KNOWS_TRAIL_POINTS, WALKED_TRAIL_POINTS
from .errors import InputError

Reason = Literal["Health/exercise", "Enjoying nature", "Leisure with family/friends", "Event", "Other"]
Satisfaction = Literal["Natural scenery", "Comfortable course", "Signposts", "Accessibility", "Other"]


class SurveyAnswers(BaseModel):
    """Trail survey snapshot. Only the two yes/no answers are scored."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    knows_trail: StrictBool = False
    has_walked_trail: StrictBool = False
    reasons: FrozenSet[Reason] = frozenset()
    satisfaction: FrozenSet[Satisfaction] = frozenset()


def calc_survey_bonus(answers: SurveyAnswers) -> int:
    bonus = 0
    if answers.knows_trail:
        bonus += KNOWS_TRAIL_POINTS
    if answers.has_walked_trail:
        bonus += WALKED_TRAIL_POINTS
    return bonus


def score_survey(knows_trail, has_walked_trail, reasons=(), satisfaction=()):
    answers = SurveyAnswers(
        knows_trail=bool(knows_trail),
        has_walked_trail=bool(has_walked_trail),
        reasons=frozenset(reasons),
        satisfaction=frozenset(satisfaction),
    )
    return calc_survey_bonus(answers)


def check_bonus(bonus) -> int:
    if isinstance(bonus, bool) or not isinstance(bonus, int) or not 0 <= bonus <= BONUS_MAX:
        raise InputError("bonus", bonus, f"bonus must be an integer in 0..{BONUS_MAX}, got {bonus!r}")
    return bonus


def bonus_multiplier(bonus: int) -> float:
    # 2% off the total per bonus point
    return 1.0 - BONUS_STEP * check_bonus(bonus)
