"""Structural edits and transactions: the only way the engines mutate a board.

A :class:`StructuralEdit` is one reversible board mutation. A
:class:`Transaction` executes edits in order and remembers them; if the
block that fills it raises, every edit already applied is reverted in
reverse order before the exception propagates::

    with transaction("Paste Board Elements") as tx:
        tx.execute(AddNetwork(board, network))
        tx.execute(AddNetworkElements(network, vias=[via]))
    # on exception: board is exactly as before the block
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, TypeVar

from .board import Board, BoardItem, Circuit, Junction, NetClass, NetSignal, Network, Via, Wire
from .exceptions import InvariantViolationError
from .logging_config import create_logger

logger = create_logger(__name__)

E = TypeVar("E", bound="StructuralEdit")


class StructuralEdit(ABC):
    """A single reversible board mutation."""

    @abstractmethod
    def execute(self) -> None:
        """Apply the mutation. Must leave the board unchanged if it raises."""

    @abstractmethod
    def revert(self) -> None:
        """Undo a previously applied mutation."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of this edit."""


class AddNetClass(StructuralEdit):
    def __init__(self, circuit: Circuit, name: str) -> None:
        self.circuit = circuit
        self.net_class = NetClass(name=name)

    def execute(self) -> None:
        self.circuit.add_net_class(self.net_class)

    def revert(self) -> None:
        self.circuit.remove_net_class(self.net_class)

    @property
    def description(self) -> str:
        return f"Add net class {self.net_class.name!r}"


class AddNetSignal(StructuralEdit):
    def __init__(self, circuit: Circuit, net_class: NetClass, name: str | None = None) -> None:
        self.circuit = circuit
        self.net_signal = NetSignal(
            name=name or circuit.next_auto_net_name(), net_class=net_class
        )

    def execute(self) -> None:
        self.circuit.add_net_signal(self.net_signal)

    def revert(self) -> None:
        self.circuit.remove_net_signal(self.net_signal)

    @property
    def description(self) -> str:
        return f"Add net signal {self.net_signal.name!r}"


class AddNetwork(StructuralEdit):
    def __init__(self, board: Board, network: Network) -> None:
        self.board = board
        self.network = network

    def execute(self) -> None:
        self.board.add_network(self.network)

    def revert(self) -> None:
        self.board.remove_network(self.network)

    @property
    def description(self) -> str:
        return f"Add network on {self.network.net_signal.name!r}"


class RemoveNetwork(StructuralEdit):
    def __init__(self, board: Board, network: Network) -> None:
        self.board = board
        self.network = network

    def execute(self) -> None:
        self.board.remove_network(self.network)

    def revert(self) -> None:
        self.board.add_network(self.network)

    @property
    def description(self) -> str:
        return f"Remove network on {self.network.net_signal.name!r}"


class AddNetworkElements(StructuralEdit):
    def __init__(
        self,
        network: Network,
        vias: Iterable[Via] = (),
        junctions: Iterable[Junction] = (),
        wires: Iterable[Wire] = (),
    ) -> None:
        self.network = network
        self.vias = list(vias)
        self.junctions = list(junctions)
        self.wires = list(wires)

    def execute(self) -> None:
        self.network.add_elements(self.vias, self.junctions, self.wires)

    def revert(self) -> None:
        self.network.remove_elements(self.vias, self.junctions, self.wires)

    @property
    def description(self) -> str:
        return (
            f"Add {len(self.vias)} vias, {len(self.junctions)} junctions,"
            f" {len(self.wires)} wires to {self.network.net_signal.name!r}"
        )


class AddBoardItem(StructuralEdit):
    def __init__(self, board: Board, item: BoardItem) -> None:
        self.board = board
        self.item = item

    def execute(self) -> None:
        self.board.add_item(self.item)

    def revert(self) -> None:
        self.board.remove_item(self.item)

    @property
    def description(self) -> str:
        return f"Add {type(self.item).__name__} {self.item.uuid[:8]}"


class RemoveBoardItem(StructuralEdit):
    def __init__(self, board: Board, item: BoardItem) -> None:
        self.board = board
        self.item = item

    def execute(self) -> None:
        self.board.remove_item(self.item)

    def revert(self) -> None:
        self.board.add_item(self.item)

    @property
    def description(self) -> str:
        return f"Remove {type(self.item).__name__} {self.item.uuid[:8]}"


class TransactionState(Enum):
    OPEN = "open"
    COMMITTED = "committed"
    REVERTED = "reverted"


class Transaction:
    """An ordered group of structural edits applied all-or-nothing."""

    def __init__(self, description: str) -> None:
        self.transaction_id = str(uuid.uuid4())[:8]
        self.description = description
        self.state = TransactionState.OPEN
        self.edits: list[StructuralEdit] = []

    def execute(self, edit: E) -> E:
        """Apply ``edit`` and record it. Returns the edit for chaining."""
        if self.state is not TransactionState.OPEN:
            raise InvariantViolationError(
                f"Transaction {self.transaction_id} is {self.state.value}, not open"
            )
        edit.execute()
        self.edits.append(edit)
        return edit

    def commit(self) -> None:
        self.state = TransactionState.COMMITTED

    def revert(self) -> None:
        """Revert all applied edits, last first."""
        for edit in reversed(self.edits):
            edit.revert()
        self.state = TransactionState.REVERTED

    def reapply(self) -> None:
        """Re-execute a reverted transaction, first edit first."""
        if self.state is not TransactionState.REVERTED:
            raise InvariantViolationError(
                f"Transaction {self.transaction_id} is {self.state.value}, not reverted"
            )
        for edit in self.edits:
            edit.execute()
        self.state = TransactionState.COMMITTED

    @property
    def is_empty(self) -> bool:
        return not self.edits

    def to_dict(self) -> dict[str, Any]:
        return {
            "transaction_id": self.transaction_id,
            "description": self.description,
            "state": self.state.value,
            "edit_count": len(self.edits),
            "edits": [e.description for e in self.edits],
        }


@contextmanager
def transaction(description: str) -> Iterator[Transaction]:
    """Open a transaction that rolls back if the block raises."""
    tx = Transaction(description)
    try:
        yield tx
    except BaseException:
        logger.warning(f"{description} failed, reverting {len(tx.edits)} applied edits")
        tx.revert()
        raise
    tx.commit()
    logger.debug(f"{description} committed with {len(tx.edits)} edits")
