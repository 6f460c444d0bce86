"""
Network Lists binding.

Covers notification subscriptions: listing subscribed network lists and
(un)subscribing e-mail recipients to change notifications.
"""

from .subscriptions import (
    GetNetworkListSubscriptionResponse,
    Link,
    NetworkListSubscriptionClient,
    NetworkListSubscriptionRequest,
    NetworkListSummary,
)

__all__ = [
    "GetNetworkListSubscriptionResponse",
    "Link",
    "NetworkListSubscriptionClient",
    "NetworkListSubscriptionRequest",
    "NetworkListSummary",
]
