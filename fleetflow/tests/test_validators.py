import pytest

from fleetflow.services.exceptions import ValidationError
from fleetflow.services.validators import BusinessRules


def test_require_reports_first_missing_field():
    with pytest.raises(ValidationError) as exc:
        BusinessRules.require(vehicle_id=1, driver_id=None, origin="")
    assert exc.value.field == "driver_id"


def test_require_rejects_blank_strings():
    with pytest.raises(ValidationError) as exc:
        BusinessRules.require(origin="   ")
    assert exc.value.field == "origin"


def test_validate_choice():
    BusinessRules.validate_choice("Draft", ["Draft", "On Trip"], "status")
    with pytest.raises(ValidationError):
        BusinessRules.validate_choice("Completed", ["Draft", "On Trip"], "status")


@pytest.mark.parametrize(
    "completion_rate, complaints, expected",
    [
        (90, 0, 90),
        (90, 2, 80),
        (10, 5, 0),
        (None, 0, 80),
        (100, None, 100),
    ],
)
def test_safety_score_is_clamped(completion_rate, complaints, expected):
    assert BusinessRules.safety_score(completion_rate, complaints) == expected
