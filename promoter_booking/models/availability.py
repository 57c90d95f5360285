"""Availability model."""
from sqlalchemy import Column, Integer, BigInteger, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from promoter_booking.database import Base, IdType
from promoter_booking.domain import Weekday, WeeklyAvailability


class Availability(Base):
    """
    Weekly availability (disponibilidade) of a promoter.

    One row per promoter; each column holds the hours available on that
    weekday, 0 meaning the promoter cannot be booked that day.
    """

    __tablename__ = 'availability'
    __table_args__ = tuple(
        CheckConstraint(f'{day.value} >= 0', name=f'ck_availability_{day.value}_non_negative')
        for day in Weekday
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    promoter_id = Column(BigInteger, ForeignKey('promoter.id', ondelete='CASCADE'), nullable=False, unique=True)
    segunda = Column(Integer, nullable=False, default=0, server_default='0')
    terca = Column(Integer, nullable=False, default=0, server_default='0')
    quarta = Column(Integer, nullable=False, default=0, server_default='0')
    quinta = Column(Integer, nullable=False, default=0, server_default='0')
    sexta = Column(Integer, nullable=False, default=0, server_default='0')
    sabado = Column(Integer, nullable=False, default=0, server_default='0')
    domingo = Column(Integer, nullable=False, default=0, server_default='0')

    # Relationships
    promoter = relationship('Promoter', back_populates='availability')

    def to_weekly(self) -> WeeklyAvailability:
        """Snapshot used by the selection validator."""
        return WeeklyAvailability(**{day.value: int(getattr(self, day.value) or 0) for day in Weekday})

    def __repr__(self):
        return f"<Availability(promoter_id={self.promoter_id}, {self.to_weekly().to_dict()})>"
