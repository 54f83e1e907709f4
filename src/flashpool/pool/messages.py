from decimal import Decimal

from eth_typing import ChecksumAddress
from pydantic import BaseModel, ConfigDict

from flashpool.denomination import Denomination
from flashpool.host.token import TokenReceive
from flashpool.validation.evm_values import ValidatedFeeRate, ValidatedUint128


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)


class InstantiateMsg(_Message):
    admin: str | None = None
    fee: ValidatedFeeRate
    loan_denom: Denomination


# Execute messages
class UpdateConfig(_Message):
    admin: str | None = None
    fee: ValidatedFeeRate


class Loan(_Message):
    receiver: str
    amount: ValidatedUint128


class AssertBalance(_Message):
    amount: ValidatedUint128


class Provide(_Message): ...


class Withdraw(_Message): ...


type ExecuteMsg = UpdateConfig | Loan | AssertBalance | Provide | Withdraw | TokenReceive


# Query messages
class GetConfig(_Message): ...


class Provided(_Message):
    address: str


class TotalProvided(_Message): ...


class Entitled(_Message):
    address: str


class Balance(_Message): ...


class Providers(_Message): ...


type QueryMsg = GetConfig | Provided | TotalProvided | Entitled | Balance | Providers


class ConfigResponse(_Message):
    admin: ChecksumAddress | None
    fee: Decimal
    loan_denom: Denomination


class ProviderEntry(_Message):
    address: ChecksumAddress
    shares: int


# Messages sent by the pool to a borrower
class ReceiveLoan(_Message):
    """
    Notifies a borrower that it holds the loan. The borrower must return the loan plus the fee to
    the pool before the unit of work ends.
    """
