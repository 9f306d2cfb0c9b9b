from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker

from ..config import DATABASE_URL

engine = create_async_engine(DATABASE_URL, future=True, echo=False)
AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()


if engine.dialect.name == 'sqlite':
    # sqlite ignores ON DELETE CASCADE unless asked per connection
    @event.listens_for(engine.sync_engine, 'connect')
    def _enable_sqlite_fks(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


async def init_models():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Import models to register tables
from .users import User  # noqa: F401,E402
from .session_tokens import SessionToken  # noqa: F401,E402
from .friendships import Friendship  # noqa: F401,E402
from .items import Item  # noqa: F401,E402
from .goals import Goal  # noqa: F401,E402
from .posts import Post  # noqa: F401,E402
from .likes import Like  # noqa: F401,E402
from .comments import Comment  # noqa: F401,E402
from .messages import Message  # noqa: F401,E402
