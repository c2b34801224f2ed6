"""Uptime calculation from systemd monotonic timestamps."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import psutil


def get_boot_time() -> datetime:
    """Get the wall-clock time the system booted.

    Returns:
        Timezone-aware UTC datetime, truncated to whole seconds
    """
    return datetime.fromtimestamp(int(psutil.boot_time()), tz=timezone.utc)


def compute_uptime(monotonic_us: int, boot_time: datetime, now: Optional[datetime] = None) -> str:
    """Get a human-readable time elapsed since a monotonic event.

    Args:
        monotonic_us: Microseconds since boot at which the event happened
        boot_time: Wall-clock boot time (naive values are taken as UTC)
        now: Reference time (defaults to the current time; naive values are taken as UTC)

    Returns:
        Formatted elapsed time (e.g., '1d 1h 0m 0s'); never negative
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if boot_time.tzinfo is None:
        boot_time = boot_time.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    event_time = boot_time + timedelta(microseconds=monotonic_us)
    elapsed = max(now - event_time, timedelta(0))

    return format_duration(int(elapsed.total_seconds()))


def format_duration(secs: int) -> str:
    """Format seconds as '1d 2h 3m 4s'.

    Leading zero components are dropped; once a component is shown,
    every smaller one is shown too. Seconds are always present.
    """
    days, remainder = divmod(secs, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0 or parts:
        parts.append(f"{hours}h")
    if minutes > 0 or parts:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")

    return " ".join(parts)
