"""
Network list notification subscriptions.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.errors import APIError, ValidationError
from shared.logging import get_logger
from shared.session import Session, decode_body

SUCCESS_STATUSES = (200, 201, 204)


class Link(BaseModel):
    href: str = ""
    method: Optional[str] = None


class NetworkListSummary(BaseModel):
    """One subscribed network list."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    element_count: int = Field(0, alias="elementCount")
    links: Dict[str, Link] = Field(default_factory=dict)
    name: str = ""
    network_list_type: str = Field("", alias="networkListType")
    read_only: bool = Field(False, alias="readOnly")
    shared: bool = False
    sync_point: int = Field(0, alias="syncPoint")
    type: str = ""
    unique_id: str = Field("", alias="uniqueId")
    access_control_group: Optional[str] = Field(None, alias="accessControlGroup")
    description: Optional[str] = None


class GetNetworkListSubscriptionResponse(BaseModel):
    """Body of GET /network-list/v2/notifications/subscriptions."""

    model_config = ConfigDict(populate_by_name=True)

    links: Dict[str, Link] = Field(default_factory=dict)
    network_lists: List[NetworkListSummary] = Field(default_factory=list, alias="networkLists")


@dataclass
class NetworkListSubscriptionRequest:
    """Recipients to (un)subscribe and the lists they apply to."""
    recipients: List[str] = field(default_factory=list)
    unique_ids: List[str] = field(default_factory=list)

    def validation_errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not self.recipients:
            errors["recipients"] = "Recipients required"
        if not self.unique_ids:
            errors["uniqueIds"] = "UniqueIDs required"
        return errors

    def to_body(self) -> Dict[str, List[str]]:
        return {"recipients": list(self.recipients), "uniqueIds": list(self.unique_ids)}


class NetworkListSubscriptionClient:
    """Client for network list change notifications."""

    base_path = "/network-list/v2/notifications"

    def __init__(self, session: Session):
        self.session = session
        self.logger = get_logger("networklists.subscriptions")

    async def get_network_list_subscription(self) -> GetNetworkListSubscriptionResponse:
        """List the network lists the caller is subscribed to."""
        self.logger.debug("GetNetworkListSubscription")

        response = await self.session.exec(
            "GET",
            f"{self.base_path}/subscriptions",
            operation="networklists.get_subscription"
        )

        if response.status_code != 200:
            raise self._api_error("GetNetworkListSubscription", response)

        return decode_body(response, GetNetworkListSubscriptionResponse)

    async def update_network_list_subscription(self, params: NetworkListSubscriptionRequest) -> None:
        """Subscribe recipients to change notifications for the given lists."""
        await self._change_subscription("subscribe", "UpdateNetworkListSubscription", params)

    async def remove_network_list_subscription(self, params: NetworkListSubscriptionRequest) -> None:
        """Unsubscribe recipients from the given lists."""
        await self._change_subscription("unsubscribe", "RemoveNetworkListSubscription", params)

    async def _change_subscription(self, action: str, operation: str,
                                   params: NetworkListSubscriptionRequest) -> None:
        errors = params.validation_errors()
        if errors:
            raise ValidationError(errors, message=f"{operation} request validation failed")

        self.logger.debug(operation, recipients=len(params.recipients), unique_ids=params.unique_ids)

        response = await self.session.exec(
            "POST",
            f"{self.base_path}/{action}",
            operation=f"networklists.{action}",
            json=params.to_body()
        )

        if response.status_code not in SUCCESS_STATUSES:
            raise self._api_error(operation, response)

    def _api_error(self, operation: str, response) -> APIError:
        error = APIError.from_response(response)
        self.logger.error(
            f"{operation} request failed",
            status_code=response.status_code,
            title=error.problem.title
        )
        return error
