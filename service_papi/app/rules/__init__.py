"""
Rule tree package.

Defines the recursive rule tree model used by Property Manager property
versions and the client that fetches and submits it.

Modules of interest:
- models: Rules, behaviors, variables, request/response shapes, and the
  structural validation applied before a tree is submitted.
- client: GET/PUT of a property version's rule tree.

Validation walks the tree with an explicit stack and reports every
violation by field path in a single ValidationError.
"""

from .client import PropertyRulesClient
from .models import (
    MAX_RULE_DEPTH,
    GetRuleTreeRequest,
    GetRuleTreeResponse,
    RuleBehavior,
    RuleCustomOverride,
    RuleError,
    RuleOptions,
    Rules,
    RuleValidateMode,
    RuleVariable,
    UpdateRulesRequest,
    UpdateRulesResponse,
)

__all__ = [
    "PropertyRulesClient",
    "MAX_RULE_DEPTH",
    "GetRuleTreeRequest",
    "GetRuleTreeResponse",
    "RuleBehavior",
    "RuleCustomOverride",
    "RuleError",
    "RuleOptions",
    "Rules",
    "RuleValidateMode",
    "RuleVariable",
    "UpdateRulesRequest",
    "UpdateRulesResponse",
]
