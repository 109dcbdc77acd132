from typing import List, Optional
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.order_detail import OrderDetail


class CRUDOrderDetailSP(CRUDBase[OrderDetail]):
    """Detalles de orden: escrituras vía funciones almacenadas, lecturas vía consultas."""

    def list_by_order(self, db: Session, *, order_id: int) -> List[OrderDetail]:
        return (
            db.query(OrderDetail)
            .filter(OrderDetail.order_id == order_id)
            .order_by(OrderDetail.id)
            .all()
        )

    def get_by_id(self, db: Session, *, id: int) -> Optional[OrderDetail]:
        return self.get(db, id=id)

    def create(self, db: Session, *, db_obj: OrderDetail) -> OrderDetail:
        new_id = db.execute(
            text("SELECT add_order_detail(:order_id, :product_name, :quantity, :price)"),
            {
                "order_id": db_obj.order_id,
                "product_name": db_obj.product_name,
                "quantity": db_obj.quantity,
                "price": db_obj.price,
            },
        ).scalar_one()
        self.commit(db)
        return self.get(db, id=new_id)

    def delete(self, db: Session, *, id: int) -> bool:
        affected = db.execute(
            text("SELECT delete_order_detail(:order_detail_id)"),
            {"order_detail_id": id},
        ).scalar_one()
        self.commit(db)
        return affected > 0


order_detail_sp = CRUDOrderDetailSP(OrderDetail)
