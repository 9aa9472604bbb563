"""Database engine and helpers.

The `Database` handle owns the SQLModel/SQLAlchemy engine for the
configured `DATABASE_URL`. One handle is opened when the application is
created and stored on `app.state`; request handlers receive sessions
from it through the `get_session` dependency instead of importing a
global engine.
"""

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, Session, create_engine

from . import models  # noqa: F401  (registers tables on SQLModel.metadata)


class Database:
    """Process-wide persistence handle shared by all requests."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        connect_args = {}
        if make_url(url).get_backend_name() == "sqlite":
            connect_args = {"check_same_thread": False}
        self.engine = create_engine(url, echo=echo, connect_args=connect_args)

    def create_db_and_tables(self):
        """Create the `user` and `exercise` tables if they are missing.

        There is no migration tool; the schema is created from SQLModel
        metadata on startup.
        """
        SQLModel.metadata.create_all(self.engine)

    def session(self) -> Session:
        return Session(self.engine)

    @staticmethod
    def describe(url: str) -> str:
        """Return `url` with any password masked, for log lines."""
        return make_url(url).render_as_string(hide_password=True)


def get_session(request: Request):
    """Yield a database `Session` for FastAPI dependency injection.

    The session comes from the `Database` attached to the running app and
    is closed when the request scope finishes.
    """
    database: Database = request.app.state.database
    with database.session() as session:
        yield session
