"""
Relational database engine and sessions
"""
import logging

from sqlmodel import create_engine, SQLModel, Session
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs = {"echo": echo}

        if url.startswith("sqlite"):
            # FastAPI runs sync endpoints in a threadpool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # Keep a single connection so the in-memory database survives
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **engine_kwargs)

        if url.startswith("sqlite"):
            # Enable foreign key constraints for SQLite
            @event.listens_for(self.engine, "connect")
            def set_sqlite_pragma(dbapi_conn, connection_record):
                cursor = dbapi_conn.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

    def init_db(self):
        """Initialize database tables"""
        logger.info("Creating tables on %s", self.engine.url.render_as_string(hide_password=True))
        SQLModel.metadata.create_all(self.engine)

    def get_session(self):
        """Get a new database session"""
        return Session(self.engine, expire_on_commit=False)
