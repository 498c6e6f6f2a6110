"""Per-connection decoder state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ConnectionState:
    """Identity bound to one device connection.

    Created unbound when the connection opens. Only the identity binder
    changes it; every successful announcement overwrites the previous
    binding. Never share an instance between connections.
    """

    device_id: int | None = None

    @property
    def is_bound(self) -> bool:
        return self.device_id is not None

    def bind(self, device_id: int) -> None:
        self.device_id = device_id

    def reset(self) -> None:
        self.device_id = None
