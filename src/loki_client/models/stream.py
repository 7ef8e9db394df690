"""Log stream models and their incremental builder.

A stream is one label set plus an ordered list of ``(timestamp, line)``
entries. The wire shape expected by the push endpoint is::

    {"streams": [{"stream": {"app": "foo"}, "values": [["1000", "hello"]]}]}

Timestamps are nanoseconds since the Unix epoch and travel as decimal
strings.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictStr, model_serializer
from pydantic_core import PydanticSerializationError

from loki_client.exceptions import ClockError, SerializationError, StreamBuilderError
from loki_client.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], int]
"""Zero-argument callable returning nanoseconds since the Unix epoch."""

LabelSet = Annotated[
    dict[StrictStr, StrictStr],
    AfterValidator(lambda labels: MappingProxyType(dict(labels))),
]
"""Read-only label mapping stored on a built stream."""


class Entry(BaseModel):
    """A single timestamped log line.

    Attributes:
        timestamp: Nanoseconds since the Unix epoch.
        line: The log text.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(ge=0, strict=True)
    line: StrictStr

    @model_serializer
    def serialize_entry(self) -> list[str]:
        return [str(self.timestamp), self.line]


class Stream(BaseModel):
    """A read-only label set with its ordered log entries.

    Instances are produced by :class:`StreamBuilder`; entries keep the
    order in which they were logged.

    Attributes:
        labels: Read-only mapping of label names to label values.
        entries: Log entries in call order.
    """

    model_config = ConfigDict(frozen=True)

    labels: LabelSet = Field(default_factory=dict, validate_default=True)
    entries: tuple[Entry, ...] = ()

    @model_serializer
    def serialize_stream(self) -> dict[str, Any]:
        return {
            "stream": dict(self.labels),
            "values": [entry.model_dump() for entry in self.entries],
        }

    @classmethod
    def builder(cls, clock: Clock = time.time_ns) -> StreamBuilder:
        """Start building a new stream.

        Args:
            clock: Source of default timestamps.

        Returns:
            An empty StreamBuilder.
        """
        return StreamBuilder(clock=clock)


class Streams(BaseModel):
    """Request envelope for the push endpoint."""

    model_config = ConfigDict(frozen=True)

    streams: tuple[Stream, ...] = Field(default=(), strict=True)

    def to_json(self) -> str:
        """Encode the envelope as the compact JSON push body.

        Returns:
            JSON text of the form ``{"streams": [...]}``.

        Raises:
            SerializationError: If the envelope cannot be encoded.
        """
        try:
            return self.model_dump_json()
        except PydanticSerializationError as e:
            raise SerializationError(f"Failed to encode push payload: {e}") from e


class StreamBuilder:
    """Incrementally constructs a :class:`Stream`.

    Every method returns the builder so calls can be chained, and the
    chain ends with :meth:`build`. A builder is single-use: once built,
    any further call raises :class:`StreamBuilderError`.

    Example:
        ```python
        stream = (
            StreamBuilder()
            .label("app", "checkout")
            .log("order accepted")
            .log("order shipped", timestamp=1_700_000_000_000_000_000)
            .build()
        )
        ```
    """

    def __init__(self, clock: Clock = time.time_ns) -> None:
        """Initialize an empty builder.

        Args:
            clock: Source of default timestamps, in nanoseconds since the epoch.
        """
        self._clock = clock
        self._labels: dict[str, str] = {}
        self._entries: list[Entry] = []
        self._last_default: int | None = None
        self._built = False

    def _ensure_open(self) -> None:
        if self._built:
            raise StreamBuilderError("StreamBuilder has already been built")

    def _now(self) -> int:
        """Read the clock, keeping defaulted timestamps strictly increasing."""
        reading = self._clock()
        if reading < 0:
            raise ClockError(reading)
        if self._last_default is not None and reading <= self._last_default:
            return self._last_default + 1
        return reading

    @staticmethod
    def _check_label(key: object, value: object) -> None:
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(
                f"Label key and value must be strings, got {type(key).__name__}"
                f" and {type(value).__name__}"
            )

    def label(self, key: str, value: str) -> StreamBuilder:
        """Set a label, replacing any previous value for the same key.

        Args:
            key: Label name.
            value: Label value.

        Returns:
            This builder.

        Raises:
            TypeError: If the key or value is not a string.
        """
        self._ensure_open()
        self._check_label(key, value)
        self._labels[key] = value
        return self

    def labels(self, labels: Mapping[str, str]) -> StreamBuilder:
        """Set several labels at once, with the same semantics as :meth:`label`.

        Nothing is applied if any pair is not a string pair.
        """
        self._ensure_open()
        pending = dict(labels)
        for key, value in pending.items():
            self._check_label(key, value)
        self._labels.update(pending)
        return self

    def log(self, line: str, timestamp: int | None = None) -> StreamBuilder:
        """Append a log line.

        Args:
            line: The log text.
            timestamp: Nanoseconds since the epoch. Read from the clock when omitted.

        Returns:
            This builder.

        Raises:
            ClockError: If the clock reports a time before the epoch.
        """
        self._ensure_open()
        defaulted = timestamp is None
        resolved = self._now() if timestamp is None else timestamp
        entry = Entry(timestamp=resolved, line=line)

        self._entries.append(entry)
        if defaulted:
            self._last_default = resolved
        return self

    def build(self) -> Stream:
        """Finish the stream. The builder cannot be used afterwards."""
        self._ensure_open()
        stream = Stream(labels=dict(self._labels), entries=tuple(self._entries))
        self._built = True
        logger.debug(
            "Stream built",
            labels=len(stream.labels),
            entries=len(stream.entries),
        )
        return stream
