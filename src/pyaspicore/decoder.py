"""Line dispatcher and per-connection session.

:class:`AspicoreDecoder` is stateless apart from its collaborators and
counters, so one instance can serve every connection. Each connection
owns a :class:`~pyaspicore.state.ConnectionState`, usually through a
:class:`DecoderSession`, and feeds it lines strictly one at a time.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncIterable, Awaitable, Callable
from datetime import UTC, datetime

from pyaspicore._redact import redact_for_log
from pyaspicore.directory import DeviceDirectory
from pyaspicore.events import DecodeEvent, DecodeOutcome, DecoderStats
from pyaspicore.models.position import PositionRecord
from pyaspicore.protocol.gga import parse_gga
from pyaspicore.protocol.identity import bind_identity
from pyaspicore.protocol.rmc import parse_rmc
from pyaspicore.protocol.sentences import SentenceKind, classify
from pyaspicore.state import ConnectionState

_logger = logging.getLogger(__name__)

PositionSink = Callable[[PositionRecord], Awaitable[None] | None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AspicoreDecoder:
    """Route raw sentences to the identity binder or a location parser.

    Usage::

        decoder = AspicoreDecoder(directory)
        state = ConnectionState()
        for line in lines:
            record = await decoder.decode(state, line)

    Parameters
    ----------
    directory : DeviceDirectory
        Resolves announced identifiers to device ids.
    clock : callable
        Returns the current time; supplies the date for GGA fixes.
    on_event : callable or None
        Called with a :class:`~pyaspicore.events.DecodeEvent` for every
        line. Exceptions it raises are logged and ignored.
    """

    def __init__(
        self,
        directory: DeviceDirectory,
        *,
        clock: Callable[[], datetime] = _utcnow,
        on_event: Callable[[DecodeEvent], None] | None = None,
    ) -> None:
        self._directory = directory
        self._clock = clock
        self._on_event = on_event
        self._stats = DecoderStats()

    @property
    def stats(self) -> DecoderStats:
        return self._stats

    async def decode(self, state: ConnectionState, sentence: str) -> PositionRecord | None:
        """Decode one line, returning a record or ``None``.

        Never raises for malformed input: unknown prefixes, grammar
        mismatches, unresolved identifiers and fixes from an unbound
        connection are all discarded.
        """
        sentence = sentence.rstrip("\r\n")
        kind = classify(sentence)

        if kind is None:
            self._emit(DecodeOutcome.UNKNOWN_SENTENCE, None, state.device_id, sentence)
            return None

        if kind is SentenceKind.IDENTITY:
            outcome = await bind_identity(state, sentence, self._directory)
            self._emit(outcome, kind, state.device_id, sentence)
            return None

        device_id = state.device_id
        if device_id is None:
            self._emit(DecodeOutcome.UNBOUND_DEVICE, kind, None, sentence)
            return None

        if kind is SentenceKind.RMC:
            record = parse_rmc(sentence, device_id)
        elif kind is SentenceKind.GGA:
            record = parse_gga(sentence, device_id, self._clock())
        else:
            raise AssertionError(f"Unhandled sentence kind {kind!r}")

        if record is None:
            self._emit(DecodeOutcome.GRAMMAR_MISMATCH, kind, device_id, sentence)
            return None

        self._emit(DecodeOutcome.POSITION, kind, device_id, sentence)
        return record

    def _emit(
        self,
        outcome: DecodeOutcome,
        kind: SentenceKind | None,
        device_id: int | None,
        sentence: str,
    ) -> None:
        self._stats.record(outcome)
        if outcome is not DecodeOutcome.POSITION:
            _logger.debug("Discarded %s (%s): %s", kind or "sentence", outcome, redact_for_log(sentence))

        if self._on_event is None:
            return
        try:
            event = DecodeEvent(
                outcome=outcome,
                kind=kind,
                device_id=device_id,
                sentence=sentence,
                observed_at=self._clock(),
            )
            self._on_event(event)
        except Exception:
            _logger.debug("on_event callback failed", exc_info=True)


class DecoderSession:
    """One connection's decoding loop: owns the state, forwards records to a sink.

    The sink may be a plain function or a coroutine function. Errors raised
    by the sink propagate to the caller.
    """

    def __init__(self, decoder: AspicoreDecoder, sink: PositionSink) -> None:
        self._decoder = decoder
        self._sink = sink
        self.state = ConnectionState()

    @property
    def device_id(self) -> int | None:
        return self.state.device_id

    async def feed(self, sentence: str) -> PositionRecord | None:
        """Decode *sentence* and hand any record to the sink."""
        record = await self._decoder.decode(self.state, sentence)
        if record is not None:
            result = self._sink(record)
            if inspect.isawaitable(result):
                await result
        return record

    async def consume(self, lines: AsyncIterable[str]) -> int:
        """Feed every line from *lines* in order; return the number of records emitted."""
        emitted = 0
        async for line in lines:
            if await self.feed(line) is not None:
                emitted += 1
        return emitted
