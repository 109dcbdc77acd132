from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # TestClient and uvicorn workers share the connection across threads
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    """
    Inicializa la base de datos:
    - Crea todas las tablas
    - Instala las funciones almacenadas si se usa ese backend (solo PostgreSQL)
    """
    from app import models  # noqa: F401  registra los modelos en Base
    from app.core.procedures import install_procedures

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Tablas de base de datos creadas")

    if settings.USE_STORED_PROCEDURES:
        if bind.dialect.name != "postgresql":
            logger.warning(
                f"Funciones almacenadas no soportadas en '{bind.dialect.name}', se omite su instalación"
            )
            return
        with bind.begin() as conn:
            install_procedures(conn)
        logger.info("Funciones almacenadas instaladas")
