"""
The single asset accepted by a pool, either a native coin identified by its symbol, or a token
identified by the address of its contract.

The two variants form a closed union. Code that needs per-variant behavior matches on the variant
instead of calling methods on it.
"""

from typing import Annotated, Any, Literal

from eth_typing import ChecksumAddress
from pydantic import BaseModel, ConfigDict, Field

from flashpool.exceptions import InvalidReference, WrongFunds
from flashpool.functions import validate_address
from flashpool.host.effects import BankSend, Coin, ContractCall, Effect
from flashpool.host.token import TokenSend, TokenTransfer


class NativeDenomination(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["native"] = "native"
    symbol: str

    def __str__(self) -> str:
        return self.symbol


class TokenDenomination(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["token"] = "token"
    address: str

    def __str__(self) -> str:
        return self.address


Denomination = Annotated[
    NativeDenomination | TokenDenomination,
    Field(discriminator="kind"),
]


def validate_denomination(raw: NativeDenomination | TokenDenomination) -> Denomination:
    """
    Resolve a raw asset descriptor into a checked denomination. Token addresses are returned in
    checksummed form.
    """

    match raw:
        case NativeDenomination(symbol=symbol):
            if not symbol:
                raise InvalidReference(symbol)
            return raw
        case TokenDenomination(address=address):
            return TokenDenomination(address=validate_address(address))


def match_incoming(funds: tuple[Coin, ...], symbol: str) -> int:
    """
    Return the amount of the only coin in `funds`, which must be a non-zero amount of `symbol`.
    """

    if len(funds) != 1:
        raise WrongFunds(denom=symbol)

    (provided,) = funds
    if provided.denom != symbol or provided.amount == 0:
        raise WrongFunds(denom=symbol)

    return provided.amount


def transfer_effect(
    denomination: Denomination,
    recipient: ChecksumAddress,
    amount: int,
    payload: Any = None,
) -> Effect:
    """
    Build the effect that moves `amount` of the denomination from the emitting contract to
    `recipient`.

    Without a payload this is a plain transfer. With a payload, the recipient is also notified: a
    native transfer becomes a call to the recipient carrying the coins, and a token transfer becomes
    a token `Send`, which delivers the payload through the recipient's token receive hook.
    """

    match denomination, payload:
        case NativeDenomination(symbol=symbol), None:
            return BankSend(to_address=recipient, coins=(Coin(symbol, amount),))
        case NativeDenomination(symbol=symbol), _:
            return ContractCall(contract=recipient, msg=payload, funds=(Coin(symbol, amount),))
        case TokenDenomination(address=token), None:
            return ContractCall(
                contract=validate_address(token),
                msg=TokenTransfer(recipient=recipient, amount=amount),
            )
        case TokenDenomination(address=token), _:
            return ContractCall(
                contract=validate_address(token),
                msg=TokenSend(contract=recipient, amount=amount, msg=payload),
            )
