"""
Application Security (appsec) binding.

Currently exposes the contracts/groups lookup used to find where a
security configuration can be created.
"""

from .contracts_groups import (
    ContractGroup,
    ContractsGroupsClient,
    GetContractsGroupsRequest,
    GetContractsGroupsResponse,
)

__all__ = [
    "ContractGroup",
    "ContractsGroupsClient",
    "GetContractsGroupsRequest",
    "GetContractsGroupsResponse",
]
