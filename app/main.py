from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.api.v1 import router as api_router
from app.api import deps
from app.core.config import settings
from app.core.database import init_db
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestiona el ciclo de vida de la aplicación.

    Startup: crea el esquema. Un fallo se registra pero no impide arrancar.
    """
    logger.info("Iniciando Order Management API...")
    try:
        init_db()
        logger.info("Base de datos inicializada")
    except Exception:
        logger.exception("Error inicializando la base de datos")
    backend = "funciones almacenadas" if settings.USE_STORED_PROCEDURES else "consultas ORM"
    logger.info(f"Backend de datos: {backend}")

    yield

    logger.info("Cerrando Order Management API...")


app = FastAPI(
    title="Order Management API",
    description="API para gestionar órdenes y sus detalles",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count", "X-Page", "X-Page-Size", "Location"],
)

app.include_router(api_router.api_router, prefix="/api")


@app.get("/")
def root():
    """
    Root endpoint
    """
    return {"message": "Order Management API", "version": "1.0.0"}


@app.get("/health")
def health_check(db: Session = Depends(deps.get_db)):
    """
    Health check endpoint
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception:
        logger.warning("Health check: base de datos no disponible", exc_info=True)
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "database": db_status,
        "backend": "stored_procedures" if settings.USE_STORED_PROCEDURES else "orm",
        "environment": settings.ENVIRONMENT,
        "version": "1.0.0"
    }
