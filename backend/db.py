from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from config import DATABASE_URL


def make_engine(url: str = DATABASE_URL):
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # In-memory SQLite must share one connection or every session sees an empty db
        if url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                url, echo=False, connect_args=connect_args, poolclass=StaticPool
            )
        return create_engine(url, echo=False, connect_args=connect_args)
    return create_engine(url, echo=False)


def create_db_and_tables(engine) -> None:
    SQLModel.metadata.create_all(engine)
