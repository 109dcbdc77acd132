from datetime import timezone
from decimal import Decimal
from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.types import TypeDecorator

CENTS = Decimal("0.01")


class Money(TypeDecorator):
    """
    Importe `Numeric(18, 2)`.

    SQLite guarda NUMERIC como número flotante y pierde los centavos de
    importes con 18 dígitos, así que ahí se almacena como texto.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(32))
        return dialect.type_descriptor(Numeric(18, 2))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = Decimal(value).quantize(CENTS)
        return str(value) if dialect.name == "sqlite" else value

    def process_result_value(self, value, dialect):
        return None if value is None else Decimal(value)


class UTCDateTime(TypeDecorator):
    """Fecha y hora en UTC; los valores leídos siempre llevan zona horaria."""

    impl = DateTime
    cache_ok = True

    def load_dialect_impl(self, dialect):
        return dialect.type_descriptor(DateTime(timezone=True))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            # SQLite no conserva el offset
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
