import copy

from eth_typing import ChecksumAddress

from flashpool.checksum_cache import get_checksum_address
from flashpool.exceptions import FlashPoolValueError, InsufficientFunds
from flashpool.logging import logger
from flashpool.types.aliases import Denom


class NativeLedger:
    """
    A dictionary-like class for tracking native coin balances across addresses.

    Balances are organized first by the holding address, then by the coin denomination.
    """

    def __init__(self) -> None:
        # Entries are recorded as a dict-of-dicts, keyed by address, then by denom
        self.balances: dict[
            ChecksumAddress,  # address holding balance
            dict[
                Denom,
                int,  # balance
            ],
        ] = {}

    def adjust(
        self,
        address: ChecksumAddress | str,
        denom: Denom,
        amount: int,
    ) -> None:
        """
        Apply an adjustment to the balance for a coin held by an address.

        The amount can be positive (credit) or negative (debit). The method checksums the address
        prior to use.

        Parameters
        ----------
        address: str | ChecksumAddress
            The address holding the balance.
        denom: str
            The coin denomination.
        amount: int
            The amount to adjust. May be negative or positive.

        Raises
        ------
        InsufficientFunds
            If a debit exceeds the current balance.
        """

        _address = get_checksum_address(address)

        address_balance = self.balances.setdefault(_address, {})
        current = address_balance.get(denom, 0)
        if current + amount < 0:
            raise InsufficientFunds(holder=_address, denom=denom, balance=current, amount=-amount)

        logger.debug(f"BALANCE: {_address} {'+' if amount > 0 else ''}{amount} {denom}")

        address_balance[denom] = current + amount
        if address_balance[denom] == 0:
            del address_balance[denom]
        if not address_balance:
            del self.balances[_address]

    def balance(
        self,
        address: ChecksumAddress | str,
        denom: Denom,
    ) -> int:
        """
        Get the balance of `denom` held by `address`.
        """

        _address = get_checksum_address(address)
        return self.balances.get(_address, {}).get(denom, 0)

    def transfer(
        self,
        denom: Denom,
        amount: int,
        from_addr: ChecksumAddress | str,
        to_addr: ChecksumAddress | str,
    ) -> None:
        """
        Transfer a balance between addresses. The debit is applied first, so a failed transfer
        leaves both balances untouched.
        """

        if amount < 0:
            raise FlashPoolValueError(message=f"Cannot transfer a negative amount ({amount}).")

        self.adjust(
            address=from_addr,
            denom=denom,
            amount=-amount,
        )
        self.adjust(
            address=to_addr,
            denom=denom,
            amount=amount,
        )

    def snapshot(self) -> dict[ChecksumAddress, dict[Denom, int]]:
        return copy.deepcopy(self.balances)

    def restore(self, snapshot: dict[ChecksumAddress, dict[Denom, int]]) -> None:
        self.balances = copy.deepcopy(snapshot)
