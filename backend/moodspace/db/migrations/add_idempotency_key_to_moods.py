"""
Migration script to add the idempotency_key column to an existing moods table.
Tables created by init_db already have it.
"""
import logging
from sqlalchemy import inspect, text
from moodspace.core.logging import configure_logging
from moodspace.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)


def migrate():
    """Add idempotency_key column and its per-user unique index."""
    db = SessionLocal()
    try:
        columns = [c["name"] for c in inspect(engine).get_columns("moods")]

        if "idempotency_key" not in columns:
            db.execute(text("ALTER TABLE moods ADD COLUMN idempotency_key VARCHAR(100)"))
            logger.info("Added idempotency_key column to moods table")
        else:
            logger.info("idempotency_key column already exists, skipping column creation")

        db.execute(text("""
            CREATE UNIQUE INDEX IF NOT EXISTS uq_moods_user_idempotency_key
            ON moods (user_id, idempotency_key)
        """))
        db.commit()
        logger.info("Migration completed successfully!")
    except Exception as e:
        db.rollback()
        logger.error(f"Migration failed: {e}", exc_info=True)
        raise
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    migrate()
