"""Durable storage for the single alert state record.

The record is a small text file holding an RFC 2822 timestamp. Its presence
means an alert notification has been delivered and not yet cleared; the
timestamp says when. This is the same layout as the historical lockfile, so
an existing file keeps working across upgrades.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from pathlib import Path

from .models.alert_state import AlertState

logger = logging.getLogger(__name__)

__all__ = ["AlertStateStore", "format_timestamp", "parse_timestamp"]


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value)


def parse_timestamp(text: str) -> datetime | None:
    """Parse an RFC 2822 timestamp, returning None when it is unusable.

    Timestamps without a usable offset (``-0000``) are taken as UTC.
    """
    cleaned = (text or "").strip()
    if not cleaned:
        return None
    try:
        parsed = parsedate_to_datetime(cleaned)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class AlertStateStore:
    """Read/write/clear access to the alert state file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def read(self) -> AlertState:
        """Return the stored state; missing or corrupt records read as inactive."""
        try:
            contents = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No state file at %s, alert not previously sent", self.path)
            return AlertState()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read state file %s: %s", self.path, exc)
            return AlertState()

        raised_at = parse_timestamp(contents)
        if raised_at is None:
            logger.warning(
                "Unparsable timestamp %r in %s, treating alert as inactive",
                contents,
                self.path,
            )
            return AlertState()
        return AlertState.raised(raised_at)

    def write(self, raised_at: datetime) -> AlertState:
        """Atomically replace the record with ``raised_at``.

        The timestamp goes to a temporary file in the same directory which is
        then renamed over the record, so readers never see a partial write.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = format_timestamp(raised_at)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        logger.info("Alert state written to %s (%s)", self.path, payload)
        return AlertState.raised(parse_timestamp(payload) or raised_at)

    def clear(self) -> AlertState:
        try:
            self.path.unlink()
            logger.info("Alert state cleared (%s removed)", self.path)
        except FileNotFoundError:
            logger.debug("State file %s already absent", self.path)
        return AlertState()
