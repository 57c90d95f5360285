"""Brand model."""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from promoter_booking.database import Base, IdType


class Brand(Base):
    """Brand (bandeira) grouping retail stores."""

    __tablename__ = 'brand'

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False, unique=True)

    # Relationships
    stores = relationship('Store', back_populates='brand', cascade='all, delete-orphan')

    def __repr__(self):
        return f"<Brand(id={self.id}, name='{self.name}')>"
