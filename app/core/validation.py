from datetime import date
from app.core.exceptions import ValidationException


def validate_date_range(start_date: date, end_date: date) -> None:
    """
    Reject ranges where start_date comes after end_date.

    Raises:
        ValidationException: Reported against end_date
    """
    if start_date > end_date:
        raise ValidationException(
            f"start_date {start_date} must not be after end_date {end_date}",
            field="end_date",
        )
