# footprint_engine/validation.py

from pydantic import ValidationError

from .carbon import HouseholdInput
from .constants import DEFAULT_HOUSEHOLD, DEFAULT_SURVEY
from .errors import InputError
from .survey import SurveyAnswers


def to_input_error(exc: ValidationError) -> InputError:
    """First pydantic error as an InputError naming the offending field."""
    err = exc.errors()[0]
    loc = err.get("loc") or ("input",)
    field = str(loc[0])
    return InputError(field, err.get("input"), f"{field}: {err['msg']}")


def validate_household(raw) -> HouseholdInput:
    """Build a HouseholdInput from a UI/JSON mapping.

    Missing keys take DEFAULT_HOUSEHOLD values. Any value outside its
    closed domain raises InputError; nothing is silently defaulted.
    """
    data = dict(DEFAULT_HOUSEHOLD)
    data.update(raw or {})
    try:
        return HouseholdInput.model_validate(data)
    except ValidationError as exc:
        raise to_input_error(exc) from exc


def validate_survey(raw) -> SurveyAnswers:
    data = dict(DEFAULT_SURVEY)
    data.update(raw or {})
    try:
        return SurveyAnswers.model_validate(data)
    except ValidationError as exc:
        raise to_input_error(exc) from exc
