"""Notification DTOs."""

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from healarr_notify.models.domain.event import EventGroup
from healarr_notify.models.domain.notification import DeliveryStatus, ProviderType


def parse_params(v: Any) -> Any:
    """Accept provider parameters as a dict or a JSON object string."""
    if isinstance(v, str):
        try:
            v = json.loads(v)
        except json.JSONDecodeError:
            raise ValueError("config must be a JSON object") from None
    return v


def validate_params_size(v: dict[str, Any] | None, max_keys: int = 50) -> dict[str, Any] | None:
    """Validate parameter dict size and content."""
    if v is None:
        return v
    if len(v) > max_keys:
        raise ValueError(f"Too many fields (max {max_keys})")
    for key, value in v.items():
        if len(key) > 100:
            raise ValueError("Key too long (max 100)")
        if isinstance(value, str) and len(value) > 10000:
            raise ValueError("Value too long (max 10000)")
    return v


class NotificationConfigCreate(BaseModel):
    """Notification config create DTO."""

    name: str = Field(min_length=1, max_length=255)
    provider_type: ProviderType
    config: dict[str, Any] = Field(default_factory=dict)
    events: list[str] = Field(default_factory=list, max_length=100)
    enabled: bool = True
    throttle_seconds: int = Field(default=5, ge=0, le=86400)

    @field_validator("config", mode="before")
    @classmethod
    def parse_config(cls, v: Any) -> Any:
        return parse_params(v)

    @field_validator("config")
    @classmethod
    def validate_config(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Validate dict size and content."""
        return validate_params_size(v)


class NotificationConfigUpdate(BaseModel):
    """Notification config update DTO. Unset fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    provider_type: ProviderType | None = None
    config: dict[str, Any] | None = None
    events: list[str] | None = Field(default=None, max_length=100)
    enabled: bool | None = None
    throttle_seconds: int | None = Field(default=None, ge=0, le=86400)

    @field_validator("config", mode="before")
    @classmethod
    def parse_config(cls, v: Any) -> Any:
        return parse_params(v)

    @field_validator("config")
    @classmethod
    def validate_config(cls, v: dict[str, Any] | None) -> dict[str, Any] | None:
        """Validate dict size and content."""
        return validate_params_size(v)


class NotificationConfigResponse(BaseModel):
    """Notification config response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    provider_type: str
    provider_label: str
    config: dict[str, Any]
    events: list[str]
    enabled: bool
    throttle_seconds: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationConfigListResponse(BaseModel):
    """Notification config list response DTO."""

    items: list[NotificationConfigResponse]
    total: int


class NotificationLogEntryResponse(BaseModel):
    """Delivery log entry response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    notification_id: UUID
    event_type: str
    message: str
    status: DeliveryStatus
    error: str = ""
    sent_at: datetime


class EventGroupListResponse(BaseModel):
    """Notification-eligible event catalog."""

    groups: list[EventGroup]


class TestNotificationRequest(BaseModel):
    """Test notification for an unsaved configuration."""

    __test__ = False

    provider_type: ProviderType
    config: dict[str, Any] = Field(default_factory=dict)

    @field_validator("config", mode="before")
    @classmethod
    def parse_config(cls, v: Any) -> Any:
        return parse_params(v)


class TestNotificationResponse(BaseModel):
    """Test notification result."""

    __test__ = False

    success: bool
    message: str
