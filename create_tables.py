# create_tables.py
import logging

from emphub.config.settings import settings
from emphub.init_db import init_database

def main():
    """Create all tables and the default admin account"""
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_database()
    logging.getLogger(__name__).info("All tables created successfully")

if __name__ == "__main__":
    main()
