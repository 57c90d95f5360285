"""Client model."""
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, true
from promoter_booking.database import Base, IdType


class Client(Base):
    """Client (cliente) booking promoters."""

    __tablename__ = 'client'

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(50), nullable=True)
    active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    orders = relationship('Order', back_populates='client')

    def __repr__(self):
        return f"<Client(id={self.id}, email='{self.email}')>"
