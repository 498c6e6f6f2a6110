"""Decode outcomes and instrumentation hooks.

Nothing in the decode path raises for bad input; every line ends in one
of the :class:`DecodeOutcome` values instead. Callers that want logging
or metrics subscribe to :class:`DecodeEvent` or read :class:`DecoderStats`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pyaspicore.protocol.sentences import SentenceKind


class DecodeOutcome(StrEnum):
    POSITION = "position"
    BOUND = "bound"
    GRAMMAR_MISMATCH = "grammar_mismatch"
    IDENTITY_UNRESOLVED = "identity_unresolved"
    UNBOUND_DEVICE = "unbound_device"
    UNKNOWN_SENTENCE = "unknown_sentence"


class DecodeEvent(BaseModel):
    """What happened to a single input line."""

    model_config = ConfigDict(frozen=True)

    outcome: DecodeOutcome
    kind: SentenceKind | None = None
    device_id: int | None = None
    sentence: str = ""
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


@dataclass
class DecoderStats:
    """Running per-outcome counters for one decoder."""

    counts: dict[DecodeOutcome, int] = field(default_factory=lambda: dict.fromkeys(DecodeOutcome, 0))

    def record(self, outcome: DecodeOutcome) -> None:
        self.counts[outcome] += 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def as_dict(self) -> dict[str, Any]:
        return {str(outcome): count for outcome, count in self.counts.items()}
