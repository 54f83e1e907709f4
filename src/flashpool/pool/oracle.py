from eth_typing import ChecksumAddress

from flashpool.denomination import Denomination, NativeDenomination, TokenDenomination
from flashpool.functions import validate_address
from flashpool.host.context import Querier
from flashpool.host.token import TokenBalance


def available_balance(
    querier: Querier,
    pool_address: ChecksumAddress,
    denomination: Denomination,
) -> int:
    """
    Fetch the live balance held by the pool. Errors from the underlying query are not handled here.
    """

    match denomination:
        case NativeDenomination(symbol=symbol):
            return querier.native_balance(pool_address, symbol)
        case TokenDenomination(address=token):
            balance: int = querier.query_contract(
                validate_address(token),
                TokenBalance(address=pool_address),
            )
            return balance
