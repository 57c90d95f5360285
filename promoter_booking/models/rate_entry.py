"""Rate entry model."""
from sqlalchemy import Column, BigInteger, Numeric, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from promoter_booking.database import Base, IdType


class RateEntry(Base):
    """
    Hourly rate of a promoter for a period, valid over [valid_from, valid_until).

    ``valid_until`` NULL means open-ended. Authored by back-office and
    read-only for the booking flow.
    """

    __tablename__ = 'rate_entry'
    __table_args__ = (
        Index('ix_rate_entry_lookup', 'promoter_id', 'period_id', 'valid_from'),
        CheckConstraint('hourly_rate >= 0', name='ck_rate_entry_rate_non_negative'),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    promoter_id = Column(BigInteger, ForeignKey('promoter.id', ondelete='CASCADE'), nullable=False)
    period_id = Column(BigInteger, ForeignKey('period.id'), nullable=False)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    valid_from = Column(DateTime(timezone=True), nullable=False)
    valid_until = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    promoter = relationship('Promoter', back_populates='rate_entries')
    period = relationship('Period')

    def __repr__(self):
        return (f"<RateEntry(id={self.id}, promoter_id={self.promoter_id}, period_id={self.period_id}, "
                f"rate={self.hourly_rate}, from={self.valid_from}, until={self.valid_until})>")
