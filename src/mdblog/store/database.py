"""Engine construction and schema setup for the SQL post store"""

from sqlmodel import SQLModel, create_engine

from mdblog.store import tables  # noqa: F401  registers PostRow on SQLModel.metadata


def make_engine(db_url: str):
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    return create_engine(db_url, echo=False, connect_args=connect_args)


def init_db(engine) -> None:
    SQLModel.metadata.create_all(engine)
