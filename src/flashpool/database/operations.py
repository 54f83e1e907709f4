import pathlib

from sqlalchemy import URL, Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from flashpool.database.models import Base
from flashpool.logging import logger


def get_sqlite_engine(db_path: pathlib.Path) -> Engine:
    return create_engine(
        URL.create(
            drivername="sqlite",
            database=str(db_path.absolute()),
        ),
    )


def create_new_sqlite_database(db_path: pathlib.Path) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = get_sqlite_engine(db_path)
    with engine.connect() as connection:
        assert (
            connection.execute(
                text("PRAGMA journal_mode=WAL;"),
            ).scalar()
            == "wal"
        )

    Base.metadata.create_all(bind=engine)
    engine.dispose()
    logger.info(f"Initialized new SQLite database at {db_path}")


def get_sqlite_session_factory(db_path: pathlib.Path) -> sessionmaker[Session]:
    return sessionmaker(
        bind=get_sqlite_engine(db_path),
        expire_on_commit=False,
    )
