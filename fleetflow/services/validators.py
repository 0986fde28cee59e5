from typing import Any, Iterable

from fleetflow.services.exceptions import ValidationError


class BusinessRules:
    REVENUE_PER_COMPLETED_TRIP = 40_000
    MAX_COMPLETION_RATE = 100
    MIN_SCORE = 0
    MAX_SCORE = 100
    COMPLAINT_PENALTY = 5
    DEFAULT_COMPLETION_RATE = 80

    @staticmethod
    def require(**fields: Any):
        """Raise ValidationError for the first field that is None or blank."""
        for name, value in fields.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"Missing required field: {name}.", name)

    @staticmethod
    def validate_choice(value: str, allowed: Iterable[str], field: str):
        allowed = list(allowed)
        if value not in allowed:
            raise ValidationError(
                f"Invalid {field} '{value}'. Expected one of: {', '.join(allowed)}.", field
            )

    @staticmethod
    def safety_score(completion_rate, complaints) -> int:
        """completion_rate - 5 * complaints, clamped to 0-100."""
        rate = BusinessRules.DEFAULT_COMPLETION_RATE if completion_rate is None else completion_rate
        penalty = (complaints or 0) * BusinessRules.COMPLAINT_PENALTY
        return max(BusinessRules.MIN_SCORE, min(BusinessRules.MAX_SCORE, rate - penalty))
