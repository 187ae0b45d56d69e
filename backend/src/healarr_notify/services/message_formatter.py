"""Notification message and title formatting.

Formatting is pure and never raises: unknown event types and missing or
malformed fields fall back to generic text and zero values.
"""

import math
from typing import Any

from healarr_notify.models.domain.event import EventType


def _as_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _as_int(data: dict[str, Any], key: str) -> int:
    """Read a numeric field given as int, float or numeric string."""
    value = data.get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
        return int(number) if math.isfinite(number) else 0
    return 0


def file_name_from_path(file_path: str) -> str:
    """Return the last "/" segment of a path."""
    return file_path.rsplit("/", 1)[-1]


def format_message(event_type: str, data: dict[str, Any]) -> str:
    """Format the notification body for an event.

    Args:
        event_type: Event type string
        data: Event data

    Returns:
        Message text
    """
    file_name = file_name_from_path(_as_str(data, "file_path"))
    scan_path = _as_str(data, "path")
    error = _as_str(data, "error")

    match event_type:
        case EventType.SCAN_STARTED:
            return f"🔍 Scan started: {scan_path}"
        case EventType.SCAN_COMPLETED:
            healthy = _as_int(data, "healthy_files")
            total = _as_int(data, "total_files")
            corrupt = _as_int(data, "corrupt_files")
            return f"✅ Scan complete: {scan_path}\n📊 {healthy}/{total} healthy, {corrupt} corrupt"
        case EventType.SCAN_FAILED:
            return f"❌ Scan failed: {scan_path}\n⚠️ {error}"
        case EventType.CORRUPTION_DETECTED:
            message = f"🔴 Corruption detected: {file_name}"
            corruption_type = _as_str(data, "corruption_type")
            if corruption_type:
                message += f"\n📋 Type: {corruption_type}"
            return message
        case EventType.REMEDIATION_QUEUED:
            return f"🔧 Remediation queued: {file_name}"
        case EventType.DELETION_STARTED:
            return f"🗑️ Deletion started: {file_name}"
        case EventType.DELETION_COMPLETED:
            return f"✅ File deleted for re-download: {file_name}"
        case EventType.DELETION_FAILED:
            return f"❌ Deletion failed: {file_name}\n⚠️ {error}"
        case EventType.SEARCH_STARTED:
            return f"🔎 Search triggered in *arr: {file_name}"
        case EventType.SEARCH_COMPLETED:
            return f"✅ Search completed: {file_name}"
        case EventType.SEARCH_FAILED:
            return f"❌ Search failed: {file_name}\n⚠️ {error}"
        case EventType.VERIFICATION_STARTED:
            return f"🔬 Verification started: {file_name}"
        case EventType.VERIFICATION_SUCCESS:
            return f"✅ File verified healthy: {file_name}"
        case EventType.VERIFICATION_FAILED:
            return f"❌ Verification failed: {file_name}\n⚠️ {error}"
        case EventType.DOWNLOAD_TIMEOUT:
            return f"⏰ Download timeout: {file_name}"
        case EventType.IMPORT_BLOCKED:
            return (
                f"🚫 Import blocked in *arr: {file_name}\n⚠️ {error}\n"
                "👉 Manual intervention required in Sonarr/Radarr"
            )
        case EventType.MANUALLY_REMOVED:
            return (
                f"🗑️ Download manually removed: {file_name}\n"
                "👉 Item was removed from *arr queue without being imported"
            )
        case EventType.DOWNLOAD_IGNORED:
            return (
                f"⏸️ Download ignored by user: {file_name}\n"
                "👉 User marked download as ignored in *arr - remediation stopped"
            )
        case EventType.RETRY_SCHEDULED:
            retry_count = _as_int(data, "retry_count")
            max_retries = _as_int(data, "max_retries")
            return f"🔄 Retry scheduled ({retry_count}/{max_retries}): {file_name}"
        case EventType.MAX_RETRIES_REACHED:
            return f"⚠️ Max retries exhausted ({_as_int(data, 'max_retries')}): {file_name}"
        case EventType.SEARCH_EXHAUSTED:
            message = f"🔍 No replacement found: {file_name}"
            attempts = _as_int(data, "attempts")
            if attempts > 0:
                message += f"\n📊 Attempts: {attempts}"
            reason = _as_str(data, "reason")
            if reason:
                message += f"\n📋 Reason: {reason}"
            return message + "\n👉 Check your indexers or manually search in Sonarr/Radarr"
        case _:
            return f"📢 Event: {event_type}"


TITLES: dict[str, str] = {
    EventType.SCAN_STARTED: "🔍 Scan Started",
    EventType.SCAN_COMPLETED: "✅ Scan Complete",
    EventType.SCAN_FAILED: "❌ Scan Failed",
    EventType.REMEDIATION_QUEUED: "🔧 Remediation Queued",
    EventType.DELETION_STARTED: "🗑️ Deletion Started",
    EventType.DELETION_COMPLETED: "✅ File Deleted",
    EventType.DELETION_FAILED: "❌ Deletion Failed",
    EventType.SEARCH_STARTED: "🔎 Search Triggered",
    EventType.SEARCH_COMPLETED: "✅ Search Complete",
    EventType.SEARCH_FAILED: "❌ Search Failed",
    EventType.VERIFICATION_STARTED: "🔬 Verification Started",
    EventType.VERIFICATION_SUCCESS: "✅ Verification Success",
    EventType.VERIFICATION_FAILED: "❌ Verification Failed",
    EventType.DOWNLOAD_TIMEOUT: "⏰ Download Timeout",
    EventType.IMPORT_BLOCKED: "🚫 Import Blocked - Manual Action Required",
    EventType.MANUALLY_REMOVED: "🗑️ Download Manually Removed",
    EventType.DOWNLOAD_IGNORED: "⏸️ Download Ignored by User",
    EventType.RETRY_SCHEDULED: "🔄 Retry Scheduled",
    EventType.MAX_RETRIES_REACHED: "⚠️ Max Retries Reached",
}


def format_title(event_type: str, file_name: str = "") -> str:
    """Format a short title for an event.

    Args:
        event_type: Event type string
        file_name: File name, used by corruption titles

    Returns:
        Title text
    """
    if event_type == EventType.CORRUPTION_DETECTED:
        return f"🔴 Corruption detected: {file_name}" if file_name else "🔴 Corruption Detected"
    return TITLES.get(event_type, f"📢 {event_type}")
