import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0.0)
    product_type = Column(String, nullable=False, default="simple", index=True)  # 'simple', 'flavored', 'bundle'
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    archived_at = Column(DateTime(timezone=True), nullable=True)

    components = relationship(
        "BundleComponent",
        back_populates="bundle_product",
        foreign_keys="BundleComponent.bundle_product_id",
        cascade="all, delete-orphan",
        order_by="BundleComponent.position",
    )


class Flavor(Base):
    __tablename__ = "flavors"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    flavor_type = Column(String, nullable=False, default="standard")  # 'standard' or 'special'; legacy 'all_time' reads as standard
    flavor_category = Column(String, nullable=False, default="wings", index=True)  # 'wings', 'fries', 'drinks'
    surcharge = Column(Float, nullable=True, default=0.0)
    is_active = Column(Boolean, nullable=False, default=True)  # shown in the catalog at all
    is_available = Column(Boolean, nullable=False, default=True)  # False = out of stock, shown greyed out
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    archived_at = Column(DateTime(timezone=True), nullable=True)


class BundleComponent(Base):
    """A sub-item of a bundle product, either flavor-selectable or included as-is."""
    __tablename__ = "bundle_components"

    id = Column(String(36), primary_key=True, default=_new_id)
    bundle_product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    component_product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)  # wizard step order
    quantity = Column(Integer, nullable=False, default=1)
    has_flavor_selection = Column(Boolean, nullable=False, default=False)
    total_units = Column(Integer, nullable=True)  # e.g. 6 pcs
    units_per_flavor = Column(Integer, nullable=True)  # e.g. 3 pcs per flavor slot

    bundle_product = relationship("Product", foreign_keys=[bundle_product_id], back_populates="components")
    component_product = relationship("Product", foreign_keys=[component_product_id])
