"""Period model."""
from sqlalchemy import Column, String, Time, CheckConstraint
from promoter_booking.database import Base, IdType
from promoter_booking.domain import DayClass, PeriodInfo


class Period(Base):
    """
    Period (período): named time window of a day class.

    Weekday-class periods are only selectable Monday to Friday, Saturday
    periods only on Saturday and Sunday periods only on Sunday.
    """

    __tablename__ = 'period'
    __table_args__ = (
        CheckConstraint("day_class IN ('weekday', 'saturday', 'sunday')", name='ck_period_day_class'),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    label = Column(String(80), nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    day_class = Column(String(10), nullable=False, index=True)

    def to_info(self) -> PeriodInfo:
        return PeriodInfo(id=self.id, label=self.label, day_class=DayClass(self.day_class))

    def __repr__(self):
        return f"<Period(id={self.id}, label='{self.label}', day_class='{self.day_class}')>"
