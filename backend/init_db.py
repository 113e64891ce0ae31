from database import engine, Base
import models  # noqa: F401  registers the mapped classes on Base.metadata
from sqlalchemy import inspect
import logging

logger = logging.getLogger(__name__)


def init_database(target_engine=None):
    """Create any missing tables and report what the database holds"""
    target_engine = target_engine or engine
    Base.metadata.create_all(bind=target_engine)

    tables = inspect(target_engine).get_table_names()
    missing = [name for name in Base.metadata.tables if name not in tables]
    if missing:
        logger.error(f"Tables still missing after create_all: {', '.join(missing)}")
    else:
        logger.info(f"Database ready ({len(tables)} tables): {target_engine.url.render_as_string(hide_password=True)}")
    return tables


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
