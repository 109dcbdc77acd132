from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Generic, Iterable, Optional, Type, TypeVar
from sqlalchemy import exists, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.database import Base
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def line_total(price: Any, quantity: int) -> Decimal:
    return Decimal(price) * quantity


def order_total(details: Iterable[Any]) -> Decimal:
    """Suma de `price * quantity` sobre los detalles de una orden."""
    return sum((line_total(d.price, d.quantity) for d in details), Decimal("0"))


def check_page(page: int, page_size: int) -> None:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")


class CRUDBase(Generic[ModelType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """
        Obtener un registro por ID.

        Args:
            db: Sesión de base de datos
            id: ID del registro

        Returns:
            Objeto del modelo o None si no existe
        """
        return db.query(self.model).filter(self.model.id == id).first()

    def exists(self, db: Session, *, id: Any) -> bool:
        return db.query(exists().where(self.model.id == id)).scalar()

    def count(self, db: Session) -> int:
        return db.query(func.count(self.model.id)).scalar()

    def past_last_page(self, db: Session, *, page: int, page_size: int) -> bool:
        """True si la página empieza después del último registro."""
        return (page - 1) * page_size >= self.count(db)

    def commit(self, db: Session) -> None:
        """
        Confirma la transacción actual.

        Ante un error del motor hace rollback y relanza la excepción; no hay
        reintentos ni commits parciales.
        """
        try:
            db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error confirmando cambios en '{self.model.__tablename__}': {e}", exc_info=True)
            db.rollback()
            raise
