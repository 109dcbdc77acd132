import enum
from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator
from app.core.database import Base
from app.models.types import Money, UTCDateTime


class OrderStatus(enum.IntEnum):
    PENDING = 0
    COMPLETED = 1
    CANCELED = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


class OrderStatusType(TypeDecorator):
    """Guarda el estado como entero y lo devuelve como OrderStatus."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else int(value)

    def process_result_value(self, value, dialect):
        return None if value is None else OrderStatus(value)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    customer_name = Column(String(255), nullable=False)
    total_amount = Column(Money, nullable=False, default=0)
    status = Column(OrderStatusType, nullable=False, default=OrderStatus.PENDING)
    created_at = Column(UTCDateTime, nullable=False, index=True)
    updated_at = Column(UTCDateTime, nullable=False)

    order_details = relationship(
        "OrderDetail",
        back_populates="order",
        cascade="all, delete",
        order_by="OrderDetail.id",
    )
