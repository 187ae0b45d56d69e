"""Domain event model and notification event catalog."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class EventType(StrEnum):
    """Domain event types published on the event bus."""

    # Scanning
    SCAN_STARTED = "ScanStarted"
    SCAN_COMPLETED = "ScanCompleted"
    SCAN_FAILED = "ScanFailed"
    SCAN_PROGRESS = "ScanProgress"

    # Detection
    CORRUPTION_DETECTED = "CorruptionDetected"
    CORRUPTION_IGNORED = "CorruptionIgnored"

    # Remediation
    REMEDIATION_QUEUED = "RemediationQueued"
    DELETION_STARTED = "DeletionStarted"
    DELETION_COMPLETED = "DeletionCompleted"
    DELETION_FAILED = "DeletionFailed"
    SEARCH_STARTED = "SearchStarted"
    SEARCH_COMPLETED = "SearchCompleted"
    SEARCH_FAILED = "SearchFailed"
    SEARCH_EXHAUSTED = "SearchExhausted"

    # Verification
    VERIFICATION_STARTED = "VerificationStarted"
    VERIFICATION_SUCCESS = "VerificationSuccess"
    VERIFICATION_FAILED = "VerificationFailed"
    DOWNLOAD_TIMEOUT = "DownloadTimeout"
    DOWNLOAD_PROGRESS = "DownloadProgress"
    DOWNLOAD_FAILED = "DownloadFailed"

    # Manual intervention
    IMPORT_BLOCKED = "ImportBlocked"
    MANUALLY_REMOVED = "ManuallyRemoved"
    DOWNLOAD_IGNORED = "DownloadIgnored"

    # Retries
    RETRY_SCHEDULED = "RetryScheduled"
    MAX_RETRIES_REACHED = "MaxRetriesReached"

    # System
    SYSTEM_HEALTH_DEGRADED = "SystemHealthDegraded"

    # Notification outcomes (published by the notification engine)
    NOTIFICATION_SENT = "NotificationSent"
    NOTIFICATION_FAILED = "NotificationFailed"


class Event(BaseModel):
    """A domain event as carried by the event bus."""

    event_type: str
    aggregate_type: str = ""
    aggregate_id: str = ""
    event_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class EventInfo(BaseModel):
    """Details about a single notification-eligible event type."""

    name: str
    label: str
    description: str


class EventGroup(BaseModel):
    """Related events grouped for display."""

    name: str
    events: list[EventInfo]


def _info(event_type: EventType, label: str, description: str) -> EventInfo:
    return EventInfo(name=event_type.value, label=label, description=description)


def get_event_groups() -> list[EventGroup]:
    """Get all notification-eligible event groups with labels and descriptions.

    Returns:
        List of event groups in display order
    """
    return [
        EventGroup(
            name="Scan Events",
            events=[
                _info(EventType.SCAN_STARTED, "Scan Started", "When a scan begins on a configured media path"),
                _info(EventType.SCAN_COMPLETED, "Scan Completed", "When a scan finishes with results"),
                _info(EventType.SCAN_FAILED, "Scan Failed", "When a scan encounters an error and cannot continue"),
            ],
        ),
        EventGroup(
            name="Detection Events",
            events=[
                _info(
                    EventType.CORRUPTION_DETECTED,
                    "Corruption Detected",
                    "When a file fails health check during scanning",
                ),
            ],
        ),
        EventGroup(
            name="Remediation Events",
            events=[
                _info(
                    EventType.REMEDIATION_QUEUED,
                    "Remediation Queued",
                    "When a corrupt file is queued for automatic repair",
                ),
                _info(
                    EventType.DELETION_STARTED,
                    "File Deletion Started",
                    "When the corrupt file is about to be deleted",
                ),
                _info(
                    EventType.DELETION_COMPLETED,
                    "File Deleted",
                    "When the corrupt file has been successfully removed",
                ),
                _info(
                    EventType.DELETION_FAILED,
                    "Deletion Failed",
                    "When the file could not be deleted (check permissions)",
                ),
                _info(EventType.SEARCH_STARTED, "Search Triggered", "When *arr is asked to find a replacement"),
                _info(
                    EventType.SEARCH_COMPLETED,
                    "Replacement Found",
                    "When *arr finds and grabs a replacement download",
                ),
                _info(EventType.SEARCH_FAILED, "Search Failed", "When *arr search encounters an error"),
            ],
        ),
        EventGroup(
            name="Verification Events",
            events=[
                _info(
                    EventType.VERIFICATION_STARTED,
                    "Verification Started",
                    "When checking if the new download is healthy",
                ),
                _info(
                    EventType.VERIFICATION_SUCCESS,
                    "Successfully Repaired",
                    "When the replacement file passes health checks",
                ),
                _info(
                    EventType.VERIFICATION_FAILED,
                    "Replacement Corrupt",
                    "When the new download is also corrupt",
                ),
                _info(
                    EventType.DOWNLOAD_TIMEOUT,
                    "Download Timeout",
                    "When the replacement download takes too long",
                ),
            ],
        ),
        EventGroup(
            name="Manual Intervention Required",
            events=[
                _info(
                    EventType.IMPORT_BLOCKED,
                    "Import Blocked",
                    "When *arr blocks import (quality/cutoff issues)",
                ),
                _info(
                    EventType.MANUALLY_REMOVED,
                    "Manually Removed",
                    "When user removes item from *arr queue",
                ),
                _info(
                    EventType.DOWNLOAD_IGNORED,
                    "Download Ignored",
                    "When download was skipped or ignored by *arr",
                ),
                _info(
                    EventType.SEARCH_EXHAUSTED,
                    "No Replacement Found",
                    "When indexers have no candidates after retries",
                ),
            ],
        ),
        EventGroup(
            name="Retry Events",
            events=[
                _info(EventType.RETRY_SCHEDULED, "Retry Scheduled", "When a manual retry is triggered for an item"),
                _info(EventType.MAX_RETRIES_REACHED, "Max Retries", "When remediation has failed too many times"),
            ],
        ),
        EventGroup(
            name="System Events",
            events=[
                _info(
                    EventType.SYSTEM_HEALTH_DEGRADED,
                    "System Health Degraded",
                    "When system health checks detect issues",
                ),
            ],
        ),
    ]


def get_notifiable_event_types() -> list[str]:
    """Get the flat list of event types notifications can subscribe to."""
    return [info.name for group in get_event_groups() for info in group.events]
