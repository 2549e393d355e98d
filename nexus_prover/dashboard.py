"""Text helpers for the dashboard screen: titles, timestamps, uptime and error cleanup."""

from __future__ import annotations

_HTML_STATUS_MESSAGES = (
    ("502", "❌ HTTP 502 Bad Gateway"),
    ("503", "❌ HTTP 503 Service Unavailable"),
    ("504", "❌ HTTP 504 Gateway Timeout"),
    ("500", "❌ HTTP 500 Internal Server Error"),
    ("429", "⏳ HTTP 429 Rate Limited"),
)
_HTML_FALLBACK = "❌ HTTP Error (server returned HTML)"

_FOOTER_QUIT = "[Q] Quit"
_FOOTER_UPDATE = (
    "[Q] Quit | 🚀 New version available! Check release notes at github.com/nexus-xyz/nexus-cli"
)


def format_compact_timestamp(timestamp: str) -> str:
    """Turn ``YYYY-MM-DD HH:MM:SS`` into ``MM-DD HH:MM:SS``; other text is returned as is."""
    date_part, sep, time_part = timestamp.partition(" ")
    if not sep:
        return timestamp
    raw = date_part.encode("utf-8")
    if len(raw) < 5:
        return timestamp
    try:
        month_day = raw[5:].decode("utf-8")
    except UnicodeDecodeError:
        return timestamp
    return f"{month_day} {time_part}"


def clean_http_error_message(msg: str) -> str:
    """Reduce an HTTP error message to its essential part."""
    if "<html>" in msg or "<!DOCTYPE" in msg:
        for code, text in _HTML_STATUS_MESSAGES:
            if code in msg:
                return text
        return _HTML_FALLBACK

    status_pos = msg.find("status ")
    if status_pos != -1:
        tail = msg[status_pos:]
        status_end = tail.find(":")
        if status_end == -1:
            status_end = tail.find("<")
        if status_end != -1:
            status_part = msg[: status_pos + status_end]
            error_start = status_part.rfind("error")
            if error_start == -1:
                error_start = status_part.rfind("Error")
            if error_start != -1:
                return f"❌ {status_part[error_start:]}"
            return f"❌ HTTP {status_part[status_pos:]}"

    return msg


def format_uptime(seconds: float) -> str:
    """Format an uptime in seconds as days, hours, minutes and seconds."""
    total = int(seconds)
    if total < 0:
        raise ValueError("uptime must not be negative")
    days = total // 86400
    hours = (total % 86400) // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return f"UPTIME: {days}d {hours}h {minutes}m {secs}s"


def title_text(version: str, update_available: bool, latest_version: str | None = None) -> str:
    """The dashboard title, mentioning an available update if there is one."""
    if update_available:
        if latest_version is not None:
            return f"=== NEXUS PROVER v{version} → 🚀 {latest_version} UPDATE AVAILABLE ==="
        return f"=== NEXUS PROVER v{version} → 🚀 UPDATE AVAILABLE ==="
    return f"=== NEXUS PROVER v{version} ==="


def footer_text(update_available: bool) -> str:
    """The dashboard footer, with an update hint when one is available."""
    return _FOOTER_UPDATE if update_available else _FOOTER_QUIT