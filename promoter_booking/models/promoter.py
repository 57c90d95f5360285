"""Promoter model."""
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, true
from promoter_booking.database import Base, IdType
from promoter_booking.models.store import promoter_store


class Promoter(Base):
    """Promoter (promotor) offered for booking by clients."""

    __tablename__ = 'promoter'

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    tax_id = Column(String(20), nullable=True)  # CPF
    family = Column(String(80), nullable=True)
    job_role = Column(String(80), nullable=True)
    city = Column(String(120), nullable=True, index=True)
    uf = Column(String(2), nullable=True, index=True)
    active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    availability = relationship('Availability', back_populates='promoter', uselist=False,
                                cascade='all, delete-orphan')
    stores = relationship('Store', secondary=promoter_store, back_populates='promoters')
    rate_entries = relationship('RateEntry', back_populates='promoter', cascade='all, delete-orphan')

    def __repr__(self):
        return f"<Promoter(id={self.id}, name='{self.name}', active={self.active})>"
