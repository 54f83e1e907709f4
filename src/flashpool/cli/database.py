import click
from sqlalchemy import select
from sqlalchemy.orm import Session

from flashpool.cli import cli
from flashpool.config import settings
from flashpool.database import (
    KeyValueTable,
    create_new_sqlite_database,
    get_sqlite_engine,
)
from flashpool.version import __version__


@cli.group()
def database() -> None:
    """
    Database commands
    """


@database.command("reset")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def database_reset(*, force: bool) -> None:
    """
    Remove and recreate the database.
    """

    if force or click.confirm(
        f"The existing database at {settings.database.path} will be removed and a new, empty database will be created and initialized using the schema included in flashpool version {__version__}. Do you want to proceed?",  # noqa: E501
        default=False,
    ):
        settings.database.path.unlink(missing_ok=True)
        create_new_sqlite_database(settings.database.path)
    else:
        raise click.Abort


@database.command("show")
def database_show() -> None:
    """
    Print every stored contract value, grouped by contract address.
    """

    if not settings.database.path.exists():
        raise click.ClickException(f"No database found at {settings.database.path}")

    engine = get_sqlite_engine(settings.database.path)
    try:
        with Session(engine) as session:
            for row in session.scalars(
                select(KeyValueTable).order_by(KeyValueTable.namespace, KeyValueTable.key)
            ):
                click.echo(f"{row.namespace} {row.key} {row.value.decode()}")
    finally:
        engine.dispose()
