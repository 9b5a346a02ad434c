from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from emphub.config.settings import settings

DATABASE_URL = settings.DATABASE_URL

# sslmode is only passed through for PostgreSQL, sqlite needs check_same_thread off
engine = create_engine(
    DATABASE_URL,
    connect_args=settings.get_connect_args()
)

def enable_sqlite_foreign_keys(bind):
    """SQLite ignores ON DELETE rules unless foreign keys are switched on per connection"""
    @event.listens_for(bind, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

if settings.is_sqlite():
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Imported wherever a DB session is needed
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
