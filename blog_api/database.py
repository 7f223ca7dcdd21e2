from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from blog_api.config import DATABASE_URL, SQL_ECHO

if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is not set")

# SQLite (local development and tests) shares one connection across threads;
# anything else gets a regular pool that survives idle disconnects.
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=SQL_ECHO
    )
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=300,    # Recycle connections after 5 minutes
        echo=SQL_ECHO
    )

# Create sessionmaker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create base class for models
Base = declarative_base()

# Dependency to get database session
def get_db():
    """
    Database session dependency for FastAPI routes
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Create all tables
def create_tables():
    """
    Create all database tables
    """
    # Register every model on Base.metadata before creating
    import blog_api.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def drop_tables():
    """Drop all database tables"""
    import blog_api.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
