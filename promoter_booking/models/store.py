"""Store model and the promoter/store join table."""
from sqlalchemy import Column, String, Table, ForeignKey, BigInteger
from sqlalchemy.orm import relationship
from promoter_booking.database import Base, IdType


promoter_store = Table(
    'promoter_store',
    Base.metadata,
    Column('promoter_id', BigInteger, ForeignKey('promoter.id', ondelete='CASCADE'), primary_key=True),
    Column('store_id', BigInteger, ForeignKey('store.id', ondelete='CASCADE'), primary_key=True),
)


class Store(Base):
    """Store (loja) belonging to exactly one brand."""

    __tablename__ = 'store'

    id = Column(IdType, primary_key=True, autoincrement=True)
    brand_id = Column(BigInteger, ForeignKey('brand.id'), nullable=False)
    name = Column(String(200), nullable=False)
    city = Column(String(120), nullable=False, index=True)
    uf = Column(String(2), nullable=False, index=True)

    # Relationships
    brand = relationship('Brand', back_populates='stores')
    promoters = relationship('Promoter', secondary=promoter_store, back_populates='stores')

    def __repr__(self):
        return f"<Store(id={self.id}, name='{self.name}', city='{self.city}', uf='{self.uf}')>"
