"""Net registry: net classes and the named net signals networks belong to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..constants import AUTO_NET_SIGNAL_PREFIX
from ..exceptions import InvariantViolationError
from .items import new_uuid


@dataclass(eq=False)
class NetClass:
    name: str
    uuid: str = field(default_factory=new_uuid)


@dataclass(eq=False)
class NetSignal:
    """A named electrical net."""

    name: str
    net_class: NetClass
    uuid: str = field(default_factory=new_uuid)

    def to_dict(self) -> dict[str, Any]:
        return {"uuid": self.uuid, "name": self.name, "net_class": self.net_class.name}


class Circuit:
    """Exact-name lookup and registration of net classes and net signals."""

    def __init__(self) -> None:
        self._net_classes: dict[str, NetClass] = {}
        self._net_signals: dict[str, NetSignal] = {}

    @property
    def net_classes(self) -> list[NetClass]:
        return list(self._net_classes.values())

    @property
    def net_signals(self) -> list[NetSignal]:
        return list(self._net_signals.values())

    def get_net_class_by_name(self, name: str) -> NetClass | None:
        for net_class in self._net_classes.values():
            if net_class.name == name:
                return net_class
        return None

    def get_net_signal_by_name(self, name: str) -> NetSignal | None:
        for signal in self._net_signals.values():
            if signal.name == name:
                return signal
        return None

    def get_net_signal(self, signal_uuid: str) -> NetSignal | None:
        return self._net_signals.get(signal_uuid)

    def contains_net_signal(self, signal: NetSignal) -> bool:
        return self._net_signals.get(signal.uuid) is signal

    def add_net_class(self, net_class: NetClass) -> None:
        if net_class.uuid in self._net_classes:
            raise InvariantViolationError(
                f"Net class {net_class.name!r} is already registered", element=net_class.uuid
            )
        if self.get_net_class_by_name(net_class.name) is not None:
            raise InvariantViolationError(
                f"Net class name {net_class.name!r} is already in use", element=net_class.uuid
            )
        self._net_classes[net_class.uuid] = net_class

    def remove_net_class(self, net_class: NetClass) -> None:
        if self._net_classes.get(net_class.uuid) is not net_class:
            raise InvariantViolationError(
                f"Net class {net_class.name!r} is not registered", element=net_class.uuid
            )
        if any(s.net_class is net_class for s in self._net_signals.values()):
            raise InvariantViolationError(
                f"Net class {net_class.name!r} still has net signals", element=net_class.uuid
            )
        del self._net_classes[net_class.uuid]

    def add_net_signal(self, signal: NetSignal) -> None:
        if signal.uuid in self._net_signals:
            raise InvariantViolationError(
                f"Net signal {signal.name!r} is already registered", element=signal.uuid
            )
        if self.get_net_signal_by_name(signal.name) is not None:
            raise InvariantViolationError(
                f"Net signal name {signal.name!r} is already in use", element=signal.uuid
            )
        if self._net_classes.get(signal.net_class.uuid) is not signal.net_class:
            raise InvariantViolationError(
                f"Net class of {signal.name!r} is not registered", element=signal.uuid
            )
        self._net_signals[signal.uuid] = signal

    def remove_net_signal(self, signal: NetSignal) -> None:
        if self._net_signals.get(signal.uuid) is not signal:
            raise InvariantViolationError(
                f"Net signal {signal.name!r} is not registered", element=signal.uuid
            )
        del self._net_signals[signal.uuid]

    def next_auto_net_name(self) -> str:
        """Return the lowest free ``N#<n>`` name."""
        taken = {s.name for s in self._net_signals.values()}
        n = 1
        while f"{AUTO_NET_SIGNAL_PREFIX}{n}" in taken:
            n += 1
        return f"{AUTO_NET_SIGNAL_PREFIX}{n}"
