"""
Rule tree data models for the Property Manager API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from shared.errors import ValidationError

# Levels of children allowed below the root rule.
MAX_RULE_DEPTH = 64


class RuleValidateMode(str, Enum):
    """Server-side validation strictness."""
    FAST = "fast"
    FULL = "full"


class RuleModel(BaseModel):
    """Base for wire models: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(populate_by_name=True)

    def to_body(self) -> Dict[str, Any]:
        """Serialize to the JSON shape the API expects."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class RuleBehavior(RuleModel):
    """A behavior (action) or criterion (match condition)."""

    name: str = Field("", description="Behavior or criterion name")
    locked: Optional[str] = Field(None, description="Vendor lock flag")
    options: Dict[str, Any] = Field(default_factory=dict, description="Vendor-defined options")
    uuid: Optional[str] = Field(None, description="Server-assigned identifier")

    def validation_errors(self, path: str) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not self.name:
            errors[f"{path}.name"] = "Name required"
        if not self.options:
            errors[f"{path}.options"] = "Options required"
        return errors


class RuleCustomOverride(RuleModel):
    """Reference to an override managed outside the tree."""

    name: str = Field("", description="Override name")
    override_id: str = Field("", alias="overrideId", description="Override identifier")

    def validation_errors(self, path: str) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not self.name:
            errors[f"{path}.name"] = "Name required"
        if not self.override_id:
            errors[f"{path}.overrideId"] = "OverrideID required"
        return errors


class RuleOptions(RuleModel):
    """Rule-level options. Unset flags are left out of the body."""

    is_secure: Optional[bool] = Field(None, alias="is_secure")


class RuleVariable(RuleModel):
    """A user variable scoped to a rule and its descendants."""

    name: str = Field("", description="Variable name")
    value: str = Field("", description="Initial value")
    description: str = Field("", description="Free-text description")
    hidden: bool = Field(False, description="Hide the value in the UI")
    sensitive: bool = Field(False, description="Treat the value as a secret")

    def validation_errors(self, path: str) -> Dict[str, str]:
        if not self.name:
            return {f"{path}.name": "Name required"}
        return {}


class Rules(RuleModel):
    """One node of a rule tree.

    Children are owned by their parent. Removing a rule from the tree is
    done by dropping it from the parent's ``children`` before submitting.
    Fields the model does not know about are kept and sent back as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field("", description="Rule name")
    comment: Optional[str] = Field(None, description="Free-text annotation")
    criteria_locked: bool = Field(False, alias="criteriaLocked")
    behaviors: List[RuleBehavior] = Field(default_factory=list)
    criteria: List[RuleBehavior] = Field(default_factory=list)
    children: List["Rules"] = Field(default_factory=list)
    variables: List[RuleVariable] = Field(default_factory=list)
    custom_override: Optional[RuleCustomOverride] = Field(None, alias="customOverride")
    options: Optional[RuleOptions] = Field(None)
    uuid: Optional[str] = Field(None, description="Server-assigned identifier")
    advanced_override: Optional[str] = Field(None, alias="advancedOverride")

    def walk(self, path: str = "rules") -> Iterator[Tuple[str, "Rules"]]:
        """Yield ``(path, rule)`` for this rule and every descendant, pre-order."""
        for node_path, _, node in self._walk_with_depth(path):
            yield node_path, node

    def _walk_with_depth(self, path: str) -> Iterator[Tuple[str, int, "Rules"]]:
        stack: List[Tuple[str, int, Rules]] = [(path, 0, self)]
        while stack:
            node_path, depth, node = stack.pop()
            yield node_path, depth, node
            for index in range(len(node.children) - 1, -1, -1):
                stack.append((f"{node_path}.children[{index}]", depth + 1, node.children[index]))

    def validation_errors(self, path: str = "rules", exempt_containers: bool = False) -> Dict[str, str]:
        """Collect every violation in the tree, keyed by field path.

        With ``exempt_containers`` a rule that has children may have no
        behaviors of its own. Nesting deeper than ``MAX_RULE_DEPTH`` levels
        below the root is reported on the ``children`` of the deepest
        allowed rule.
        """
        errors: Dict[str, str] = {}
        for node_path, depth, node in self._walk_with_depth(path):
            if depth == MAX_RULE_DEPTH and node.children:
                errors[f"{node_path}.children"] = (
                    f"Rule nesting must not exceed {MAX_RULE_DEPTH} levels"
                )
            if not node.name:
                errors[f"{node_path}.name"] = "Name required"
            if not node.behaviors and not (exempt_containers and node.children):
                errors[f"{node_path}.behaviors"] = "Behaviors required"
            if node.custom_override is not None:
                errors.update(node.custom_override.validation_errors(f"{node_path}.customOverride"))
            for index, behavior in enumerate(node.behaviors):
                errors.update(behavior.validation_errors(f"{node_path}.behaviors[{index}]"))
            for index, criterion in enumerate(node.criteria):
                errors.update(criterion.validation_errors(f"{node_path}.criteria[{index}]"))
            for index, variable in enumerate(node.variables):
                errors.update(variable.validation_errors(f"{node_path}.variables[{index}]"))
        return errors

    def ensure_valid(self, exempt_containers: bool = False) -> None:
        """Raise ValidationError if the tree is incomplete."""
        errors = self.validation_errors(exempt_containers=exempt_containers)
        if errors:
            raise ValidationError(errors, message="Rule tree validation failed")


Rules.model_rebuild()


class RuleError(RuleModel):
    """Server-side problem reported alongside an accepted rule tree."""

    type: str = ""
    title: str = ""
    detail: str = ""
    instance: str = ""
    behavior_name: str = Field("", alias="behaviorName")


class GetRuleTreeResponse(RuleModel):
    """Body of GET .../rules."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    account_id: str = Field("", alias="accountId")
    contract_id: str = Field("", alias="contractId")
    group_id: str = Field("", alias="groupId")
    property_id: str = Field("", alias="propertyId")
    property_version: int = Field(0, alias="propertyVersion")
    etag: str = ""
    rule_format: str = Field("", alias="ruleFormat")
    rules: Rules = Field(default_factory=Rules)


class UpdateRulesResponse(GetRuleTreeResponse):
    """Body of PUT .../rules. ``errors`` may be non-empty on a 200."""

    errors: List[RuleError] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def _target_errors(property_id: str, property_version: int, contract_id: str,
                   group_id: str, validate_mode: Optional[str]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not property_id:
        errors["propertyId"] = "PropertyID required"
    if not property_version:
        errors["propertyVersion"] = "PropertyVersion required"
    if not contract_id:
        errors["contractId"] = "ContractID required"
    if not group_id:
        errors["groupId"] = "GroupID required"
    if validate_mode and validate_mode not in {m.value for m in RuleValidateMode}:
        errors["validateMode"] = (
            f"ValidateMode must be one of: {', '.join(m.value for m in RuleValidateMode)}"
        )
    return errors


@dataclass
class GetRuleTreeRequest:
    """Path and query parameters for GET .../rules."""
    property_id: str
    property_version: int
    contract_id: str
    group_id: str
    validate_mode: Optional[str] = None
    validate_rules: bool = True

    def validation_errors(self) -> Dict[str, str]:
        return _target_errors(
            self.property_id, self.property_version,
            self.contract_id, self.group_id, self.validate_mode
        )


@dataclass
class UpdateRulesRequest:
    """Path, query, header and body parameters for PUT .../rules."""
    property_id: str
    property_version: int
    contract_id: str
    group_id: str
    rules: Rules
    validate_mode: Optional[str] = None
    validate_rules: bool = True
    dry_run: bool = False
    etag: Optional[str] = None
    rule_format: Optional[str] = None

    def validation_errors(self, exempt_containers: bool = False) -> Dict[str, str]:
        errors = _target_errors(
            self.property_id, self.property_version,
            self.contract_id, self.group_id, self.validate_mode
        )
        errors.update(self.rules.validation_errors(exempt_containers=exempt_containers))
        return errors

    def to_body(self) -> Dict[str, Any]:
        """The request body is the bare rule tree."""
        return self.rules.to_body()
