"""
Script para inicializar la base de datos: crea las tablas y, si está
habilitado el backend de funciones almacenadas, instala las funciones.
"""
import logging
from app.core.database import init_db

logging.basicConfig(level=logging.INFO)


if __name__ == "__main__":
    print("Creando tablas en la base de datos...")
    init_db()
    print("Base de datos inicializada.")
