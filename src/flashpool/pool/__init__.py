from .contract import FlashLoanPool
from .loan import LoanPhase
from .messages import (
    AssertBalance,
    Balance,
    ConfigResponse,
    Entitled,
    GetConfig,
    InstantiateMsg,
    Loan,
    Provide,
    Provided,
    ProviderEntry,
    Providers,
    ReceiveLoan,
    TotalProvided,
    UpdateConfig,
    Withdraw,
)

__all__ = (
    "AssertBalance",
    "Balance",
    "ConfigResponse",
    "Entitled",
    "FlashLoanPool",
    "GetConfig",
    "InstantiateMsg",
    "Loan",
    "LoanPhase",
    "Provide",
    "Provided",
    "ProviderEntry",
    "Providers",
    "ReceiveLoan",
    "TotalProvided",
    "UpdateConfig",
    "Withdraw",
)
