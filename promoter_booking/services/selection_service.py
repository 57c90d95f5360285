"""Selection validator: checks a client's weekly selection against availability."""
from typing import List

from promoter_booking.domain import ValidatedSelection, WeekSelection, WeeklyAvailability
from promoter_booking.exceptions import (
    InvalidHoursError, InvalidPeriodError, NoSelectionError, PeriodNotFoundError
)
from promoter_booking.stores.interfaces import PeriodStore


def validate_selections(
    availability: WeeklyAvailability,
    selections: WeekSelection,
    periods: PeriodStore
) -> List[ValidatedSelection]:
    """
    Validate a week selection and normalise it.

    Unchosen days are ignored. For every chosen day, hours must be a
    positive integer not above the day's availability, and the period
    must exist and belong to the weekday's day class.

    Returns:
        Chosen days as ValidatedSelection, Monday to Sunday.

    Raises:
        NoSelectionError: nothing chosen (raised before any period lookup)
        InvalidHoursError: missing, non-integer, non-positive or excess hours
        InvalidPeriodError: missing period or period of another day class
        PeriodNotFoundError: period id unknown to the catalogue
    """
    chosen = [(day, selection) for day, selection in selections.items() if selection.chosen]
    if not chosen:
        raise NoSelectionError()

    # Single catalogue lookup for every referenced period
    known_periods = periods.get_periods(
        selection.period_id for _, selection in chosen if selection.period_id is not None
    )

    validated = []
    for day, selection in chosen:
        available = availability.hours_for(day)
        hours = selection.hours

        if not _is_valid_hours(hours, available):
            raise InvalidHoursError(day, hours, available)

        if selection.period_id is None:
            raise InvalidPeriodError(day)

        period = known_periods.get(selection.period_id)
        if period is None:
            raise PeriodNotFoundError(selection.period_id, day=day)
        if period.day_class != day.day_class:
            raise InvalidPeriodError(day, period.id, period.label)

        validated.append(ValidatedSelection(day=day, hours=hours, period_id=period.id))

    return validated


def _is_valid_hours(hours, available: int) -> bool:
    if available <= 0:
        return False
    if isinstance(hours, bool) or not isinstance(hours, int):
        return False
    return 0 < hours <= available
