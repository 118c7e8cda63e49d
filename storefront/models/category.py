from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, update
from sqlalchemy.orm import object_session, relationship

from storefront.db.session import Base
from storefront.models._time import utc_now


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    slug = Column(String(160), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    products = relationship("Product", back_populates="category")

    def deactivate(self):
        """Soft delete: the category and every product filed under it go inactive.

        This is the only place products are switched off on behalf of their
        category. The caller owns the transaction.
        """
        from storefront.models.product import Product

        db = object_session(self)
        db.execute(
            update(Product)
            .where(Product.category_id == self.id)
            .values(active=False, updated_at=utc_now())
        )
        self.active = False
