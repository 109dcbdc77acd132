from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase, line_total, utcnow
from app.models.order import Order
from app.models.order_detail import OrderDetail
import logging

logger = logging.getLogger(__name__)


class CRUDOrderDetail(CRUDBase[OrderDetail]):
    def list_by_order(self, db: Session, *, order_id: int) -> List[OrderDetail]:
        return (
            db.query(OrderDetail)
            .filter(OrderDetail.order_id == order_id)
            .order_by(OrderDetail.id)
            .all()
        )

    def get_by_id(self, db: Session, *, id: int) -> Optional[OrderDetail]:
        return self.get(db, id=id)

    def _lock_order(self, db: Session, order_id: int) -> Optional[Order]:
        # SELECT ... FOR UPDATE; SQLite lo ignora
        return db.get(Order, order_id, with_for_update=True)

    def create(self, db: Session, *, db_obj: OrderDetail) -> OrderDetail:
        """
        Agrega un detalle y ajusta el total de su orden.

        Si la orden padre no existe el detalle se guarda igualmente, sin
        tocar ningún total. La ruta HTTP verifica la orden antes de llamar.
        """
        db.add(db_obj)

        parent = self._lock_order(db, db_obj.order_id)
        if parent is not None:
            parent.total_amount += line_total(db_obj.price, db_obj.quantity)
            parent.updated_at = utcnow()
        else:
            logger.warning(f"Detalle creado para la orden inexistente {db_obj.order_id}")

        self.commit(db)
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, id: int) -> bool:
        db_obj = self.get(db, id=id)
        if db_obj is None:
            return False

        parent = self._lock_order(db, db_obj.order_id)
        if parent is not None:
            parent.total_amount -= line_total(db_obj.price, db_obj.quantity)
            parent.updated_at = utcnow()

        db.delete(db_obj)
        self.commit(db)
        return True


order_detail = CRUDOrderDetail(OrderDetail)
