import logging
from collections.abc import Callable
from decimal import Decimal

import pytest
from eth_typing import ChecksumAddress
from sqlalchemy import text
from sqlalchemy.orm import Session, sessionmaker

from flashpool.denomination import Denomination, NativeDenomination, TokenDenomination
from flashpool.host import Chain, Coin, TokenContract, TokenInstantiate
from flashpool.logging import logger
from flashpool.pool import FlashLoanPool, InstantiateMsg

NATIVE_DENOM = "ustake"
POOL_LABEL = "pool"


@pytest.fixture(scope="session", autouse=True)
def _set_flashpool_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def chain() -> Chain:
    return Chain()


@pytest.fixture
def admin() -> ChecksumAddress:
    return Chain.create_address("admin")


@pytest.fixture
def alice() -> ChecksumAddress:
    return Chain.create_address("alice")


@pytest.fixture
def bob() -> ChecksumAddress:
    return Chain.create_address("bob")


@pytest.fixture
def pool_address() -> ChecksumAddress:
    """
    The address every pool deployed by `deploy_pool` is given
    """
    return Chain.create_address(POOL_LABEL)


@pytest.fixture
def native_denom() -> NativeDenomination:
    return NativeDenomination(symbol=NATIVE_DENOM)


@pytest.fixture
def deploy_pool(
    chain: Chain, admin: ChecksumAddress
) -> Callable[..., ChecksumAddress]:
    def _deploy(
        loan_denom: Denomination,
        fee: Decimal | str = "0",
        pool_admin: ChecksumAddress | None = admin,
    ) -> ChecksumAddress:
        return chain.instantiate(
            FlashLoanPool(),
            InstantiateMsg(admin=pool_admin, fee=Decimal(fee), loan_denom=loan_denom),
            sender=admin,
            label=POOL_LABEL,
        )

    return _deploy


@pytest.fixture
def native_pool(
    deploy_pool: Callable[..., ChecksumAddress],
    native_denom: NativeDenomination,
) -> ChecksumAddress:
    return deploy_pool(native_denom)


@pytest.fixture
def token(
    chain: Chain,
    admin: ChecksumAddress,
    alice: ChecksumAddress,
    bob: ChecksumAddress,
) -> ChecksumAddress:
    return chain.instantiate(
        TokenContract(),
        TokenInstantiate(symbol="FLASH", initial_balances=((alice, 1_000), (bob, 1_000))),
        sender=admin,
        label="token",
    )


@pytest.fixture
def token_pool(
    deploy_pool: Callable[..., ChecksumAddress],
    token: ChecksumAddress,
) -> ChecksumAddress:
    return deploy_pool(TokenDenomination(address=token))


@pytest.fixture
def fund(chain: Chain) -> Callable[[ChecksumAddress, int], None]:
    """
    Mint native coins of the default denomination to an address
    """

    def _fund(address: ChecksumAddress, amount: int) -> None:
        chain.mint(address, [Coin(NATIVE_DENOM, amount)])

    return _fund


@pytest.fixture
def reject_sqlite_writes() -> Callable[[sessionmaker[Session], str], None]:
    """
    Install triggers that abort every insert or update of rows in one storage namespace
    """

    def _reject(session_factory: sessionmaker[Session], namespace: str) -> None:
        with session_factory.begin() as session:
            for statement in ("INSERT", "UPDATE"):
                session.execute(
                    text(
                        f"CREATE TRIGGER reject_{statement.lower()} "
                        f"BEFORE {statement} ON key_values "
                        f"WHEN NEW.namespace = '{namespace}' "
                        "BEGIN SELECT RAISE(ABORT, 'write rejected'); END"
                    )
                )

    return _reject
