from .checksum_cache import get_checksum_address
from .config import settings
from .version import __version__

# isort: split

from . import constants, exceptions, functions, types, validation
from .denomination import Denomination, NativeDenomination, TokenDenomination
from .host import Chain, Coin, MemoryStore, SqliteStore, TokenContract
from .logging import logger
from .pool import FlashLoanPool, LoanPhase
from .receivers import ScriptedLoanReceiver, SimpleLoanReceiver

__all__ = (
    "Chain",
    "Coin",
    "Denomination",
    "FlashLoanPool",
    "LoanPhase",
    "MemoryStore",
    "NativeDenomination",
    "ScriptedLoanReceiver",
    "SimpleLoanReceiver",
    "SqliteStore",
    "TokenContract",
    "TokenDenomination",
    "__version__",
    "constants",
    "exceptions",
    "functions",
    "get_checksum_address",
    "logger",
    "settings",
    "types",
    "validation",
)
