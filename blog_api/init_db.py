# init_db.py
import logging

from blog_api.database import create_tables

logger = logging.getLogger(__name__)


def init_database():
    """Initialize database"""
    logger.info("Creating database tables...")
    create_tables()
    logger.info("Database initialized!")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
