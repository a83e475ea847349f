from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import get_settings

settings = get_settings()

# Each statement sees the latest committed rows, so a request that has already
# read the venue does not pin an older snapshot for the admission check.
engine = create_async_engine(
    settings.database_url,
    echo=settings.echo_sql,
    isolation_level=settings.db_isolation_level,
    pool_pre_ping=True,
    pool_recycle=3600,
)

async_session = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
