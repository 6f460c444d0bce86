"""
Property Manager rule tree client.
"""

from typing import Dict, Optional

from shared.errors import APIError, NotFoundError, ValidationError
from shared.logging import get_logger
from shared.session import Session, decode_body
from .models import (
    GetRuleTreeRequest, GetRuleTreeResponse,
    UpdateRulesRequest, UpdateRulesResponse
)


def rules_path(property_id: str, property_version: int) -> str:
    return f"/papi/v1/properties/{property_id}/versions/{property_version}/rules"


def rule_tree_query(contract_id: str, group_id: str, validate_mode: Optional[str],
                    validate_rules: bool) -> Dict[str, str]:
    """Build the shared query string.

    ``validateRules`` is only sent when it is false; the API treats an
    absent parameter as true.
    """
    query = {"contractId": contract_id, "groupId": group_id}
    if validate_mode:
        query["validateMode"] = validate_mode
    if not validate_rules:
        query["validateRules"] = "false"
    return query


class PropertyRulesClient:
    """Fetches and submits property version rule trees."""

    def __init__(self, session: Session, use_prefixes: Optional[bool] = None,
                 exempt_container_rules: Optional[bool] = None):
        self.session = session
        self.use_prefixes = session.config.use_prefixes if use_prefixes is None else use_prefixes
        self.exempt_container_rules = (
            session.config.exempt_container_rules
            if exempt_container_rules is None else exempt_container_rules
        )
        self.logger = get_logger("papi.rules")

    def _headers(self) -> Dict[str, str]:
        return {"PAPI-Use-Prefixes": "true" if self.use_prefixes else "false"}

    async def get_rule_tree(self, params: GetRuleTreeRequest) -> GetRuleTreeResponse:
        """Fetch the rule tree of a property version."""
        errors = params.validation_errors()
        if errors:
            raise ValidationError(errors, message="GetRuleTree request validation failed")

        self.logger.debug(
            "GetRuleTree",
            property_id=params.property_id,
            property_version=params.property_version
        )

        path = rules_path(params.property_id, params.property_version)
        response = await self.session.exec(
            "GET",
            path,
            operation="papi.get_rule_tree",
            params=rule_tree_query(
                params.contract_id, params.group_id,
                params.validate_mode, params.validate_rules
            ),
            headers=self._headers()
        )

        if response.status_code == 404:
            self.logger.info("Rule tree not found", path=path)
            raise NotFoundError(path, details={"status_code": 404, "body": response.text})
        if response.status_code != 200:
            error = APIError.from_response(response)
            self.logger.error(
                "GetRuleTree request failed",
                path=path,
                status_code=response.status_code,
                title=error.problem.title
            )
            raise error

        return decode_body(response, GetRuleTreeResponse)

    async def update_rule_tree(self, request: UpdateRulesRequest) -> UpdateRulesResponse:
        """Replace the rule tree of a property version.

        Server-side rule problems come back in ``UpdateRulesResponse.errors``
        on an otherwise successful call; they are not raised.
        """
        errors = request.validation_errors(exempt_containers=self.exempt_container_rules)
        if errors:
            raise ValidationError(errors, message="UpdateRuleTree request validation failed")

        self.logger.debug(
            "UpdateRuleTree",
            property_id=request.property_id,
            property_version=request.property_version,
            dry_run=request.dry_run
        )

        path = rules_path(request.property_id, request.property_version)
        query = rule_tree_query(
            request.contract_id, request.group_id,
            request.validate_mode, request.validate_rules
        )
        if request.dry_run:
            query["dryRun"] = "true"

        headers = self._headers()
        if request.etag:
            headers["If-Match"] = request.etag
        if request.rule_format:
            headers["Content-Type"] = f"application/vnd.akamai.papirules.{request.rule_format}+json"

        response = await self.session.exec(
            "PUT",
            path,
            operation="papi.update_rule_tree",
            params=query,
            headers=headers,
            json=request.to_body()
        )

        if response.status_code != 200:
            error = APIError.from_response(response)
            self.logger.error(
                "UpdateRuleTree request failed",
                path=path,
                status_code=response.status_code,
                title=error.problem.title
            )
            raise error

        result = decode_body(response, UpdateRulesResponse)
        if result.has_errors:
            self.logger.warning(
                "Rule tree accepted with errors",
                path=path,
                error_count=len(result.errors)
            )
        return result
