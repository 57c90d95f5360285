"""Availability and per-weekday selection value objects."""
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from promoter_booking.domain.weekdays import DayClass, Weekday


@dataclass(frozen=True)
class PeriodInfo:
    """Read-only view of a period as seen by the validator."""
    id: int
    label: str
    day_class: DayClass


@dataclass(frozen=True)
class WeeklyAvailability:
    """Hours a promoter declared available for each weekday (0 = unavailable)."""
    segunda: int = 0
    terca: int = 0
    quarta: int = 0
    quinta: int = 0
    sexta: int = 0
    sabado: int = 0
    domingo: int = 0

    def __post_init__(self):
        for day in Weekday:
            value = getattr(self, day.value)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f'Disponibilidade de {day.value} deve ser um inteiro')
            if value < 0:
                raise ValueError(f'Disponibilidade de {day.value} não pode ser negativa')

    def hours_for(self, day: Weekday) -> int:
        return getattr(self, Weekday.parse(day).value)

    def to_dict(self) -> Dict[str, int]:
        return {day.value: self.hours_for(day) for day in Weekday}


@dataclass(frozen=True)
class DaySelection:
    """
    Client choice for a single weekday.

    An unchosen day never carries hours or a period: both are cleared
    on construction.
    """
    chosen: bool = False
    hours: Optional[Any] = None
    period_id: Optional[int] = None

    def __post_init__(self):
        if not self.chosen:
            object.__setattr__(self, 'hours', None)
            object.__setattr__(self, 'period_id', None)


@dataclass(frozen=True)
class WeekSelection:
    """Fixed seven-day selection record, one DaySelection per weekday."""
    segunda: DaySelection = field(default_factory=DaySelection)
    terca: DaySelection = field(default_factory=DaySelection)
    quarta: DaySelection = field(default_factory=DaySelection)
    quinta: DaySelection = field(default_factory=DaySelection)
    sexta: DaySelection = field(default_factory=DaySelection)
    sabado: DaySelection = field(default_factory=DaySelection)
    domingo: DaySelection = field(default_factory=DaySelection)

    def for_day(self, day: Weekday) -> DaySelection:
        return getattr(self, Weekday.parse(day).value)

    def items(self) -> Iterator[Tuple[Weekday, DaySelection]]:
        """Yield (weekday, selection) pairs in canonical order."""
        for day in Weekday:
            yield day, self.for_day(day)

    def chosen_days(self) -> List[Weekday]:
        return [day for day, selection in self.items() if selection.chosen]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'WeekSelection':
        """
        Parse the JSON shape sent by the booking form.

        Accepts ``{"segunda": {"chosen": true, "hours": 8, "period_id": 3}}``;
        ``selected`` is accepted as an alias of ``chosen``. Days missing
        from the payload are treated as not chosen.

        Raises ValueError for unknown weekdays, non-object days and a
        ``chosen`` flag that is not a JSON boolean.
        """
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError('selections deve ser um objeto por dia da semana')

        days = {}
        for key, raw in data.items():
            day = Weekday.parse(key)
            if raw is None:
                raw = {}
            if not isinstance(raw, Mapping):
                raise ValueError(f'Seleção de {day.value} deve ser um objeto')

            chosen = raw.get('chosen', raw.get('selected'))
            if chosen is None:
                chosen = False
            if not isinstance(chosen, bool):
                raise ValueError(f'chosen de {day.value} deve ser true ou false')
            days[day.value] = DaySelection(
                chosen=chosen,
                hours=_coerce_hours(raw.get('hours')),
                period_id=_coerce_id(raw.get('period_id'))
            )
        return cls(**days)


@dataclass(frozen=True)
class ValidatedSelection:
    """A chosen day that passed validation."""
    day: Weekday
    hours: int
    period_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {'day': self.day.value, 'hours': self.hours, 'period_id': self.period_id}


def _coerce_hours(value: Any) -> Optional[Any]:
    """Integral numbers become int; anything else is kept for the validator to reject."""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        return value
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return value
    if number.is_finite() and number == number.to_integral_value():
        return int(number)
    return number


def _coerce_id(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class OrderItem:
    """Validated selections of one promoter inside a checkout."""
    promoter_id: int
    selections: Tuple[ValidatedSelection, ...]

    def __post_init__(self):
        object.__setattr__(self, 'selections', tuple(self.selections))
