"""
Script to reset the database by dropping and recreating all tables.
Use this when you need to apply schema changes that require dropping tables.
"""
from app.core.database import engine, Base, init_db
from app.core.procedures import drop_procedures
from app import models  # noqa: F401
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def reset_database():
    """Drop all tables and stored functions, then recreate them."""
    try:
        if engine.dialect.name == "postgresql":
            with engine.begin() as conn:
                drop_procedures(conn)
            logger.info("Stored functions dropped")

        logger.info("Dropping existing tables...")
        Base.metadata.drop_all(bind=engine)
        logger.info("All tables dropped successfully")

        logger.info("Creating tables with new schema...")
        init_db()
        logger.info("All tables created successfully")

    except Exception as e:
        logger.error(f"Error resetting database: {e}")
        raise


if __name__ == "__main__":
    print("WARNING: This will drop all existing data in the database!")
    print("Proceeding with database reset...")
    reset_database()
    print("\n✓ Database reset complete.")
