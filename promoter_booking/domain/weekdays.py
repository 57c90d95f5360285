"""Weekdays and day classes."""
import enum


class DayClass(str, enum.Enum):
    """Group of weekdays sharing the same period catalogue."""
    WEEKDAY = 'weekday'
    SATURDAY = 'saturday'
    SUNDAY = 'sunday'


class Weekday(str, enum.Enum):
    """Bookable weekday, declared in canonical order (Monday first)."""
    SEGUNDA = 'segunda'
    TERCA = 'terca'
    QUARTA = 'quarta'
    QUINTA = 'quinta'
    SEXTA = 'sexta'
    SABADO = 'sabado'
    DOMINGO = 'domingo'

    @property
    def index(self) -> int:
        return _WEEKDAY_ORDER[self]

    @property
    def label(self) -> str:
        """Display name (e.g. 'Segunda-feira')."""
        return _WEEKDAY_LABELS[self]

    @property
    def day_class(self) -> DayClass:
        if self is Weekday.SABADO:
            return DayClass.SATURDAY
        if self is Weekday.DOMINGO:
            return DayClass.SUNDAY
        return DayClass.WEEKDAY

    @classmethod
    def parse(cls, value) -> 'Weekday':
        """Accept a Weekday or its string value (case/space insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f'Dia da semana inválido: {value}')


_WEEKDAY_ORDER = {day: position for position, day in enumerate(Weekday)}

_WEEKDAY_LABELS = {
    Weekday.SEGUNDA: 'Segunda-feira',
    Weekday.TERCA: 'Terça-feira',
    Weekday.QUARTA: 'Quarta-feira',
    Weekday.QUINTA: 'Quinta-feira',
    Weekday.SEXTA: 'Sexta-feira',
    Weekday.SABADO: 'Sábado',
    Weekday.DOMINGO: 'Domingo',
}
