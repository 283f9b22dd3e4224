from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


def to_async_url(database_url: str) -> str:
    """postgresql:// -> postgresql+asyncpg://, остальные URL без изменений."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url


def create_engine(database_url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    if to_async_url(database_url).startswith("postgresql+asyncpg://"):
        kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(
        to_async_url(database_url),
        echo=echo,
        future=True,
        **kwargs,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False
    )
