from decimal import Decimal

import click
from eth_typing import ChecksumAddress
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import sessionmaker

from flashpool.cli import cli
from flashpool.config import settings
from flashpool.database import create_new_sqlite_database, get_sqlite_engine
from flashpool.denomination import Denomination, NativeDenomination, TokenDenomination
from flashpool.exceptions import FlashPoolError
from flashpool.functions import checked_add, decimal_mul_floor
from flashpool.host import Chain, Coin, SqliteStore, TokenContract, TokenInstantiate, TokenSend
from flashpool.pool import FlashLoanPool, InstantiateMsg, Loan, LoanPhase, Provide, Withdraw
from flashpool.pool.oracle import available_balance
from flashpool.receivers import ReceiverInstantiate, SimpleLoanReceiver
from flashpool.validation.evm_values import ValidatedFeeRate

NATIVE_DENOM = "ustake"
TOKEN_SYMBOL = "FLASH"


def _parse_fee(ctx: click.Context, param: click.Parameter, value: str) -> Decimal:
    try:
        return TypeAdapter(ValidatedFeeRate).validate_python(value)
    except ValidationError:
        raise click.BadParameter(
            f"{value!r} is not a non-negative decimal with at most 18 fractional digits"
        ) from None


def _new_chain(*, persist: bool) -> Chain:
    """
    Start an in-memory chain, or one backed by a freshly reset copy of the configured database.
    """

    if not persist:
        return Chain()

    db_path = settings.database.path
    db_path.unlink(missing_ok=True)
    create_new_sqlite_database(db_path)

    engine = get_sqlite_engine(db_path)
    click.get_current_context().call_on_close(engine.dispose)
    return Chain(
        store_factory=SqliteStore.factory(sessionmaker(bind=engine, expire_on_commit=False)),
    )


def _deploy_pool(
    chain: Chain,
    *,
    fee: Decimal,
    holdings: dict[ChecksumAddress, int],
    token: bool,
) -> tuple[ChecksumAddress, Denomination]:
    """
    Deploy a pool with no admin, funding each holder with the pool's asset.
    """

    deployer = Chain.create_address("deployer")

    denomination: Denomination
    if token:
        token_address = chain.instantiate(
            TokenContract(),
            TokenInstantiate(symbol=TOKEN_SYMBOL, initial_balances=tuple(holdings.items())),
            sender=deployer,
            label="token",
        )
        denomination = TokenDenomination(address=token_address)
    else:
        for holder, amount in holdings.items():
            chain.mint(holder, [Coin(NATIVE_DENOM, amount)])
        denomination = NativeDenomination(symbol=NATIVE_DENOM)

    pool = chain.instantiate(
        FlashLoanPool(),
        InstantiateMsg(fee=fee, loan_denom=denomination),
        sender=deployer,
        label="pool",
    )
    return pool, denomination


def _provide(
    chain: Chain,
    pool: ChecksumAddress,
    denomination: Denomination,
    provider: ChecksumAddress,
    amount: int,
) -> None:
    match denomination:
        case NativeDenomination(symbol=symbol):
            chain.execute(provider, pool, Provide(), funds=[Coin(symbol, amount)])
        case TokenDenomination(address=token):
            chain.execute(provider, token, TokenSend(contract=pool, amount=amount))


def _run_loan(
    chain: Chain,
    pool: ChecksumAddress,
    receiver: ChecksumAddress,
    amount: int,
) -> LoanPhase:
    try:
        calls = chain.execute(
            Chain.create_address("borrower"),
            pool,
            Loan(receiver=receiver, amount=amount),
        )
    except FlashPoolError as exc:
        click.echo(f"Loan reverted: {exc.message}")
        return LoanPhase.REVERTED
    return LoanPhase(calls[-1].response.attribute("phase"))


@cli.group()
def simulate() -> None:
    """
    Run scenarios against a fresh chain
    """


@simulate.command("loan")
@click.option("--pool-balance", type=click.IntRange(min=1), required=True)
@click.option("--fee", type=str, callback=_parse_fee, required=True)
@click.option("--amount", type=click.IntRange(min=0), required=True)
@click.option(
    "--repay",
    type=click.IntRange(min=0),
    required=True,
    help="Amount the borrower returns",
)
@click.option("--token", is_flag=True, help="Lend a token instead of a native coin")
@click.option(
    "--persist",
    is_flag=True,
    help="Keep contract state in the configured database, replacing its contents",
)
def simulate_loan(
    *,
    pool_balance: int,
    fee: Decimal,
    amount: int,
    repay: int,
    token: bool,
    persist: bool,
) -> None:
    """
    Lend from a pool holding a single deposit to a borrower that returns a fixed amount.
    """

    chain = _new_chain(persist=persist)
    provider = Chain.create_address("provider")
    receiver = Chain.create_address("receiver")

    # The borrower holds just enough to repay beyond what it is lent
    pool, denomination = _deploy_pool(
        chain,
        fee=fee,
        holdings={provider: pool_balance, receiver: max(repay - amount, 0)},
        token=token,
    )
    chain.instantiate(
        SimpleLoanReceiver(),
        ReceiverInstantiate(amount=repay, denom=NATIVE_DENOM),
        sender=receiver,
        label="receiver",
    )
    _provide(chain, pool, denomination, provider, pool_balance)

    expected = checked_add(pool_balance, decimal_mul_floor(amount, fee))
    click.echo(f"Lending {amount} {denomination} at fee {fee}, expecting {expected} returned")

    phase = _run_loan(chain, pool, receiver, amount)
    click.echo(f"Loan {phase.value}")
    click.echo(f"Pool balance: {available_balance(chain.querier, pool, denomination)}")
    click.echo(f"Borrower balance: {available_balance(chain.querier, receiver, denomination)}")


@simulate.command("withdrawals")
@click.option(
    "--deposit",
    "deposits",
    type=click.IntRange(min=1),
    multiple=True,
    required=True,
    help="Deposit made by one provider, repeat for each provider",
)
@click.option("--fee", type=str, callback=_parse_fee, required=True)
@click.option("--loan", "loan_amount", type=click.IntRange(min=0), required=True)
@click.option(
    "--repay",
    type=click.IntRange(min=0),
    required=True,
    help="Amount the borrower returns",
)
@click.option("--token", is_flag=True, help="Lend a token instead of a native coin")
@click.option(
    "--persist",
    is_flag=True,
    help="Keep contract state in the configured database, replacing its contents",
)
def simulate_withdrawals(
    *,
    deposits: tuple[int, ...],
    fee: Decimal,
    loan_amount: int,
    repay: int,
    token: bool,
    persist: bool,
) -> None:
    """
    Take deposits from several providers, run one loan, then withdraw every provider in order.
    """

    chain = _new_chain(persist=persist)
    providers = [Chain.create_address(f"provider-{i}") for i in range(len(deposits))]
    receiver = Chain.create_address("receiver")

    holdings = dict(zip(providers, deposits, strict=True))
    holdings[receiver] = max(repay - loan_amount, 0)
    pool, denomination = _deploy_pool(chain, fee=fee, holdings=holdings, token=token)
    chain.instantiate(
        SimpleLoanReceiver(),
        ReceiverInstantiate(amount=repay, denom=NATIVE_DENOM),
        sender=receiver,
        label="receiver",
    )
    for provider, deposit in zip(providers, deposits, strict=True):
        _provide(chain, pool, denomination, provider, deposit)

    phase = _run_loan(chain, pool, receiver, loan_amount)
    click.echo(f"Loan {phase.value}")

    for i, (provider, deposit) in enumerate(zip(providers, deposits, strict=True)):
        calls = chain.execute(provider, pool, Withdraw())
        payout = calls[0].response.attribute("amount")
        click.echo(f"provider-{i} ({provider}): deposited {deposit}, withdrew {payout}")

    click.echo(f"Pool balance: {available_balance(chain.querier, pool, denomination)}")
