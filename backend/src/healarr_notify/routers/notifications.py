"""Notification configuration router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from healarr_notify.dependencies import NotificationServiceDep
from healarr_notify.exceptions import DeliveryError
from healarr_notify.models.domain.event import get_event_groups
from healarr_notify.models.domain.notification import NotificationConfig, get_provider_label
from healarr_notify.models.dto.notification import (
    EventGroupListResponse,
    NotificationConfigCreate,
    NotificationConfigListResponse,
    NotificationConfigResponse,
    NotificationConfigUpdate,
    NotificationLogEntryResponse,
    TestNotificationRequest,
    TestNotificationResponse,
)

router = APIRouter()

LogLimit = Annotated[int, Query(ge=0, le=1000)]


def _to_response(config: NotificationConfig) -> NotificationConfigResponse:
    return NotificationConfigResponse(
        id=config.id,
        name=config.name,
        provider_type=config.provider_type,
        provider_label=get_provider_label(config.provider_type),
        config=config.config,
        events=sorted(config.events),
        enabled=config.enabled,
        throttle_seconds=config.throttle_seconds,
        created_at=config.created_at,
        updated_at=config.updated_at,
    )


async def _send_test(
    service: NotificationServiceDep, provider_type: str, params: dict
) -> TestNotificationResponse:
    try:
        await service.send_test(provider_type, params)
    except DeliveryError as e:
        return TestNotificationResponse(success=False, message=e.message)
    return TestNotificationResponse(success=True, message="Test notification sent")


@router.get("", response_model=NotificationConfigListResponse)
async def list_notifications(service: NotificationServiceDep) -> NotificationConfigListResponse:
    """List all notification configurations."""
    configs = await service.list_configs()
    items = [_to_response(config) for config in configs]
    return NotificationConfigListResponse(items=items, total=len(items))


@router.post("", response_model=NotificationConfigResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: NotificationConfigCreate,
    service: NotificationServiceDep,
) -> NotificationConfigResponse:
    """Create a notification configuration."""
    return _to_response(await service.create_config(request))


@router.get("/events", response_model=EventGroupListResponse)
async def list_events() -> EventGroupListResponse:
    """List notification-eligible events grouped for display."""
    return EventGroupListResponse(groups=get_event_groups())


@router.get("/log", response_model=list[NotificationLogEntryResponse])
async def get_log(
    service: NotificationServiceDep,
    limit: LogLimit = 50,
) -> list[NotificationLogEntryResponse]:
    """Get recent delivery log entries across all configurations."""
    entries = await service.get_delivery_log(None, limit)
    return [NotificationLogEntryResponse.model_validate(entry) for entry in entries]


@router.post("/test", response_model=TestNotificationResponse)
async def test_unsaved_notification(
    request: TestNotificationRequest,
    service: NotificationServiceDep,
) -> TestNotificationResponse:
    """Send a test notification for a configuration that is not saved yet."""
    return await _send_test(service, request.provider_type.value, request.config)


@router.get("/{config_id}", response_model=NotificationConfigResponse)
async def get_notification(
    config_id: UUID,
    service: NotificationServiceDep,
) -> NotificationConfigResponse:
    """Get a notification configuration by ID."""
    return _to_response(await service.get_config(config_id))


@router.put("/{config_id}", response_model=NotificationConfigResponse)
async def update_notification(
    config_id: UUID,
    request: NotificationConfigUpdate,
    service: NotificationServiceDep,
) -> NotificationConfigResponse:
    """Update a notification configuration."""
    return _to_response(await service.update_config(config_id, request))


@router.delete("/{config_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    config_id: UUID,
    service: NotificationServiceDep,
) -> Response:
    """Delete a notification configuration and its delivery log."""
    await service.delete_config(config_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{config_id}/test", response_model=TestNotificationResponse)
async def test_notification(
    config_id: UUID,
    service: NotificationServiceDep,
) -> TestNotificationResponse:
    """Send a test notification for a saved configuration."""
    config = await service.get_config(config_id)
    return await _send_test(service, config.provider_type, config.config)


@router.get("/{config_id}/log", response_model=list[NotificationLogEntryResponse])
async def get_notification_log(
    config_id: UUID,
    service: NotificationServiceDep,
    limit: LogLimit = 50,
) -> list[NotificationLogEntryResponse]:
    """Get recent delivery log entries for one configuration."""
    entries = await service.get_delivery_log(config_id, limit)
    return [NotificationLogEntryResponse.model_validate(entry) for entry in entries]
