"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from healarr_notify.services.notification_service import NotificationService


def get_notification_service(request: Request) -> NotificationService:
    """Get the notification service started by the application lifespan."""
    return request.app.state.notification_service


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
