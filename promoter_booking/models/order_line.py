"""Order line model."""
from sqlalchemy import Column, BigInteger, Integer, String, Numeric, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from promoter_booking.database import Base, IdType


class OrderLine(Base):
    """
    Order line (seleção de promotor).

    Snapshot of the rate resolved at booking time; ``position`` keeps
    insertion order for display.
    """

    __tablename__ = 'order_line'
    __table_args__ = (
        UniqueConstraint('order_id', 'position', name='uq_order_line_position'),
        CheckConstraint('hours > 0', name='ck_order_line_hours_positive'),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    order_id = Column(BigInteger, ForeignKey('booking_order.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False)
    promoter_id = Column(BigInteger, ForeignKey('promoter.id'), nullable=False)
    weekday = Column(String(10), nullable=False)
    period_id = Column(BigInteger, ForeignKey('period.id'), nullable=False)
    hours = Column(Integer, nullable=False)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    line_total = Column(Numeric(12, 2), nullable=False)

    # Relationships
    order = relationship('Order', back_populates='lines')
    promoter = relationship('Promoter')
    period = relationship('Period')

    def __repr__(self):
        return (f"<OrderLine(id={self.id}, order_id={self.order_id}, promoter_id={self.promoter_id}, "
                f"weekday='{self.weekday}', hours={self.hours}, total={self.line_total})>")
