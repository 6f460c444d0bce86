"""
Contracts/groups lookup for Application Security.
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.errors import APIError
from shared.logging import get_logger
from shared.session import Session, decode_body


class ContractGroup(BaseModel):
    """A contract/group pair the caller can create configurations in."""

    model_config = ConfigDict(populate_by_name=True)

    contract_id: str = Field("", alias="contractId")
    display_name: str = Field("", alias="displayName")
    group_id: int = Field(0, alias="groupId")


class GetContractsGroupsResponse(BaseModel):
    """Body of GET /appsec/v1/contracts-groups."""

    model_config = ConfigDict(populate_by_name=True)

    contract_groups: List[ContractGroup] = Field(default_factory=list, alias="contract_groups")


@dataclass
class GetContractsGroupsRequest:
    """Optional filter; a zero ``group_id`` returns every pair."""
    contract_id: str = ""
    group_id: int = 0


class ContractsGroupsClient:
    """Client for the appsec contracts-groups resource."""

    path = "/appsec/v1/contracts-groups"

    def __init__(self, session: Session):
        self.session = session
        self.logger = get_logger("appsec.contracts_groups")

    async def get_contracts_groups(
        self,
        params: Optional[GetContractsGroupsRequest] = None
    ) -> GetContractsGroupsResponse:
        """List contract/group pairs, filtered in memory when a group is given."""
        params = params or GetContractsGroupsRequest()
        self.logger.debug("GetContractsGroups", contract_id=params.contract_id, group_id=params.group_id)

        response = await self.session.exec("GET", self.path, operation="appsec.get_contracts_groups")

        if response.status_code != 200:
            error = APIError.from_response(response)
            self.logger.error(
                "GetContractsGroups request failed",
                status_code=response.status_code,
                title=error.problem.title
            )
            raise error

        result = decode_body(response, GetContractsGroupsResponse)
        if params.group_id == 0:
            return result

        return GetContractsGroupsResponse(contract_groups=[
            entry for entry in result.contract_groups
            if entry.contract_id == params.contract_id and entry.group_id == params.group_id
        ])
