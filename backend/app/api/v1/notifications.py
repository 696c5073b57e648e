"""
Newsletter subscription endpoint.
"""

from fastapi import APIRouter, Depends

from app.core.responses import envelope_response, success_response
from app.schemas.notification import SubscribeRequest
from app.services.notifications import NotificationDispatcher, get_notifier

router = APIRouter()


@router.post("/subscribe")
def subscribe(
    data: SubscribeRequest,
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    """Send the subscription welcome email to the given address."""
    notifier.send_subscription_welcome(data.email, data.name or "")
    return envelope_response(
        success_response("Subscription successful", {"email": data.email})
    )
