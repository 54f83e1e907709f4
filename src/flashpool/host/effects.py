import dataclasses
from typing import Any, Self

from eth_typing import ChecksumAddress

from flashpool.types.aliases import Denom


@dataclasses.dataclass(slots=True, frozen=True)
class Coin:
    denom: Denom
    amount: int


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class BankSend:
    """
    Move native coins from the emitting contract to `to_address`.
    """

    to_address: ChecksumAddress
    coins: tuple[Coin, ...]


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class ContractCall:
    """
    Execute `msg` on `contract` with the emitting contract as sender, attaching `funds`.
    """

    contract: ChecksumAddress
    msg: Any
    funds: tuple[Coin, ...] = ()


type Effect = BankSend | ContractCall


@dataclasses.dataclass(slots=True)
class Response:
    """
    The result of a successful contract execution.

    Effects are pending work for the host. They run in order after the emitting call returns, inside
    the same unit of work, and any failure among them discards the whole unit of work.
    """

    attributes: list[tuple[str, str]] = dataclasses.field(default_factory=list)
    effects: list[Effect] = dataclasses.field(default_factory=list)

    def add_attribute(self, key: str, value: object) -> Self:
        self.attributes.append((key, str(value)))
        return self

    def add_effect(self, effect: Effect) -> Self:
        self.effects.append(effect)
        return self

    def attribute(self, key: str) -> str:
        """
        Return the value of the first attribute recorded under `key`.
        """

        for attribute_key, value in self.attributes:
            if attribute_key == key:
                return value
        raise KeyError(key)
