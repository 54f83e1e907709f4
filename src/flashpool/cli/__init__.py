import logging

import click

from flashpool.logging import logger


@click.group()
@click.version_option(package_name="flashpool")
@click.option("--verbose", "-v", is_flag=True, help="Log every call and balance change")
def cli(*, verbose: bool) -> None:
    if verbose:
        logger.setLevel(logging.DEBUG)


from . import config, database, simulate  # noqa: F401, E402
