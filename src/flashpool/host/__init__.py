from .bank import NativeLedger
from .chain import Chain, ChainQuerier, ExecutedCall
from .context import Contract, Env, ExecutionContext, MessageInfo, Querier, QueryContext
from .effects import BankSend, Coin, ContractCall, Effect, Response
from .sqlite_storage import SqliteStore
from .storage import KeyValueStore, MemoryStore
from .token import (
    TokenBalance,
    TokenContract,
    TokenInfo,
    TokenInstantiate,
    TokenReceive,
    TokenSend,
    TokenTransfer,
)

__all__ = (
    "BankSend",
    "Chain",
    "ChainQuerier",
    "Coin",
    "Contract",
    "ContractCall",
    "Effect",
    "Env",
    "ExecutedCall",
    "ExecutionContext",
    "KeyValueStore",
    "MemoryStore",
    "MessageInfo",
    "NativeLedger",
    "QueryContext",
    "Querier",
    "Response",
    "SqliteStore",
    "TokenBalance",
    "TokenContract",
    "TokenInfo",
    "TokenInstantiate",
    "TokenReceive",
    "TokenSend",
    "TokenTransfer",
)
