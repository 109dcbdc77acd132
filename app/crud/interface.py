from __future__ import annotations

from typing import List, Optional, Protocol

from sqlalchemy.orm import Session

from app.models.order import Order
from app.models.order_detail import OrderDetail


class OrderStore(Protocol):
    """
    Contrato de acceso a órdenes, independiente del backend.

    Un id inexistente nunca es un error: se devuelve None o False.
    Los errores del motor se propagan al llamador.
    """

    def list_orders(self, db: Session, *, page: int = 1, page_size: int = 10) -> List[Order]:
        """Órdenes con sus detalles, por fecha de creación descendente."""
        ...

    def get_order(self, db: Session, *, id: int) -> Optional[Order]:
        ...

    def create_order(self, db: Session, *, db_obj: Order) -> Order:
        """Persiste la orden y sus detalles; calcula el total si hay detalles."""
        ...

    def update_order(self, db: Session, *, db_obj: Order) -> Optional[Order]:
        """Actualiza nombre y estado; recalcula el total desde los detalles persistidos."""
        ...

    def delete_order(self, db: Session, *, id: int) -> bool:
        ...

    def count_orders(self, db: Session) -> int:
        ...

    def order_exists(self, db: Session, *, id: int) -> bool:
        ...


class OrderDetailStore(Protocol):
    """Contrato de acceso a los detalles de una orden."""

    def list_by_order(self, db: Session, *, order_id: int) -> List[OrderDetail]:
        ...

    def get_by_id(self, db: Session, *, id: int) -> Optional[OrderDetail]:
        ...

    def create(self, db: Session, *, db_obj: OrderDetail) -> OrderDetail:
        """Persiste el detalle y suma `price * quantity` al total de la orden padre."""
        ...

    def delete(self, db: Session, *, id: int) -> bool:
        """Elimina el detalle y resta `price * quantity` del total de la orden padre."""
        ...

    def exists(self, db: Session, *, id: int) -> bool:
        ...
