from sqlalchemy import Column, String, Integer, Numeric, Boolean, DateTime, Enum, CheckConstraint
from datetime import datetime
from app.database.connection import Base
from app.enums.product_category import ProductCategory

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    category = Column(Enum(ProductCategory, native_enum=False, length=20), nullable=False)

    price = Column(Numeric(19, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)

    # bumped on every UPDATE; a stale write raises StaleDataError
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)
    __mapper_args__ = {"version_id_col": version}
