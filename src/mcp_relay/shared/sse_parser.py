"""Server-Sent Events (SSE) parser for buffered response bodies."""

import logging
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

SSE_FIELDS = ("event", "data", "id", "retry")


@dataclass
class SSEEvent:
    """Represents a single Server-Sent Event.

    Only the ``event``, ``data``, ``id`` and ``retry`` fields are kept. A field is
    ``None`` when the event did not carry it.
    """

    event: str | None = None
    """The event type, e.g. ``message``."""

    data: str | None = None
    """The event payload. For MCP this is a JSON-RPC message encoded as text."""

    id: str | None = None
    """Optional event ID from the 'id:' field."""

    retry: str | None = None
    """Optional reconnection time from the 'retry:' field, as sent."""

    def as_dict(self) -> dict[str, str]:
        """Return the fields that were set, in field order."""
        return {f.name: value for f in fields(self) if (value := getattr(self, f.name)) is not None}

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in SSE_FIELDS)


class SSEParser:
    """
    Single-pass parser turning a complete SSE body into events.

    Each call to :meth:`parse` starts from a clean state:
    - Lines are trimmed; a blank line terminates the current event
    - ``field: value`` lines are split on the first colon, and a single leading
      space is removed from the value
    - Unknown fields, comments and lines without a colon are dropped
    - A repeated field overwrites the earlier value
    - A non-empty event left at the end of the body is emitted as well
    """

    def parse(self, body: str) -> list[SSEEvent]:
        events: list[SSEEvent] = []
        current = SSEEvent()

        for raw_line in body.split("\n"):
            line = raw_line.strip()

            # Empty line indicates end of event
            if not line:
                if not current.is_empty():
                    events.append(current)
                    current = SSEEvent()
                continue

            if ":" not in line:
                continue

            field_name, _, field_value = line.partition(":")
            field_name = field_name.strip()
            if field_value.startswith(" "):
                field_value = field_value[1:]

            if field_name in SSE_FIELDS:
                setattr(current, field_name, field_value)
            else:
                logger.debug(f"Ignoring SSE field: {field_name!r}")

        if not current.is_empty():
            events.append(current)

        return events


def parse_sse_events(body: str) -> list[SSEEvent]:
    """Parse a complete SSE body into its events, in stream order."""
    return SSEParser().parse(body)
