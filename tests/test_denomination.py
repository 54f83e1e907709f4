import pydantic
import pytest

from flashpool.denomination import (
    Denomination,
    NativeDenomination,
    TokenDenomination,
    match_incoming,
    transfer_effect,
    validate_denomination,
)
from flashpool.exceptions import InvalidReference, WrongFunds
from flashpool.host import BankSend, Chain, Coin, ContractCall, TokenSend, TokenTransfer
from flashpool.pool import ReceiveLoan

TOKEN = Chain.create_address("token")
RECIPIENT = Chain.create_address("recipient")


def test_discriminated_union():
    adapter = pydantic.TypeAdapter(Denomination)
    assert adapter.validate_python({"kind": "native", "symbol": "ustake"}) == NativeDenomination(
        symbol="ustake"
    )
    assert adapter.validate_json(f'{{"kind": "token", "address": "{TOKEN}"}}') == TokenDenomination(
        address=TOKEN
    )
    with pytest.raises(pydantic.ValidationError):
        adapter.validate_python({"kind": "ibc", "symbol": "ustake"})


def test_str():
    assert str(NativeDenomination(symbol="ustake")) == "ustake"
    assert str(TokenDenomination(address=TOKEN)) == TOKEN


def test_validate_denomination():
    native = NativeDenomination(symbol="ustake")
    assert validate_denomination(native) == native
    assert validate_denomination(TokenDenomination(address=TOKEN.lower())) == TokenDenomination(
        address=TOKEN
    )

    with pytest.raises(InvalidReference):
        validate_denomination(NativeDenomination(symbol=""))
    with pytest.raises(InvalidReference):
        validate_denomination(TokenDenomination(address="0xdeadbeef"))


def test_match_incoming():
    assert match_incoming((Coin("ustake", 5),), "ustake") == 5

    for funds in [
        (),
        (Coin("ustake", 0),),
        (Coin("uatom", 5),),
        (Coin("ustake", 5), Coin("uatom", 5)),
    ]:
        with pytest.raises(WrongFunds):
            match_incoming(funds, "ustake")


def test_transfer_effect_native():
    native = NativeDenomination(symbol="ustake")

    assert transfer_effect(native, RECIPIENT, 10) == BankSend(
        to_address=RECIPIENT, coins=(Coin("ustake", 10),)
    )
    assert transfer_effect(native, RECIPIENT, 10, payload=ReceiveLoan()) == ContractCall(
        contract=RECIPIENT,
        msg=ReceiveLoan(),
        funds=(Coin("ustake", 10),),
    )


def test_transfer_effect_token():
    token = TokenDenomination(address=TOKEN)

    assert transfer_effect(token, RECIPIENT, 10) == ContractCall(
        contract=TOKEN,
        msg=TokenTransfer(recipient=RECIPIENT, amount=10),
    )
    assert transfer_effect(token, RECIPIENT, 10, payload=ReceiveLoan()) == ContractCall(
        contract=TOKEN,
        msg=TokenSend(contract=RECIPIENT, amount=10, msg=ReceiveLoan()),
    )
