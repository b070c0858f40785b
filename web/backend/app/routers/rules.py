"""Rules router -- CRUD and enable/disable for custom moderation rules."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from postguard.config import rule_from_dict, rule_to_dict
from postguard.moderation import messages
from postguard.moderation.errors import ConfigError
from postguard.moderation.messages import ErrorCode, SuccessCode
from postguard.moderation.models import Platform, Rule
from web.backend.app.engine import get_coordinator
from web.backend.app.models.api import RuleListResponse, RuleModel, RuleResponse

router = APIRouter(prefix="/api/rules", tags=["rules"])


def _rule_model(rule: Rule) -> RuleModel:
    return RuleModel(**rule_to_dict(rule))


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": ErrorCode.RULE_NOT_FOUND, "message": messages.RULE_NOT_FOUND},
    )


def _get_or_404(rule_id: str) -> Rule:
    rule = get_coordinator().get_rule(rule_id)
    if rule is None:
        raise _not_found()
    return rule


@router.get("", response_model=RuleListResponse, summary="List rules")
async def list_rules(
    platform: Optional[str] = Query(None, description="Only rules scoped to this platform"),
    enabled_only: bool = Query(False, description="Only enabled rules"),
):
    """Return all rules, optionally filtered by platform and enabled flag."""
    scope: Optional[Platform] = None
    if platform:
        try:
            scope = Platform(platform)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": ErrorCode.INVALID_PLATFORM, "message": messages.INVALID_PLATFORM},
            ) from None
    rules = get_coordinator().list_rules(platform=scope, enabled_only=enabled_only)
    return RuleListResponse(data=[_rule_model(r) for r in rules])


@router.post(
    "",
    response_model=RuleResponse,
    summary="Add a rule",
    status_code=status.HTTP_201_CREATED,
)
async def add_rule(body: RuleModel):
    """Add a rule to the active rule set."""
    coordinator = get_coordinator()
    if coordinator.get_rule(body.id) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": ErrorCode.RULE_EXISTS, "message": messages.RULE_EXISTS},
        )
    try:
        rule = rule_from_dict(body.model_dump())
        errors = coordinator.add_rule(rule)
    except ConfigError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": e.code, "message": e.message},
        ) from e
    return RuleResponse(
        code=SuccessCode.RULE_UPDATED,
        message=messages.RULE_UPDATED,
        data=_rule_model(rule),
        pattern_errors=[str(e) for e in errors],
    )


@router.get("/{rule_id}", response_model=RuleResponse, summary="Get a rule")
async def get_rule(rule_id: str):
    return RuleResponse(data=_rule_model(_get_or_404(rule_id)))


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a rule")
async def remove_rule(rule_id: str):
    if not get_coordinator().remove_rule(rule_id):
        raise _not_found()


@router.post("/{rule_id}/enable", response_model=RuleResponse, summary="Enable a rule")
async def enable_rule(rule_id: str):
    if not get_coordinator().enable_rule(rule_id):
        raise _not_found()
    return RuleResponse(
        code=SuccessCode.RULE_UPDATED,
        message=messages.RULE_UPDATED,
        data=_rule_model(_get_or_404(rule_id)),
    )


@router.post("/{rule_id}/disable", response_model=RuleResponse, summary="Disable a rule")
async def disable_rule(rule_id: str):
    if not get_coordinator().disable_rule(rule_id):
        raise _not_found()
    return RuleResponse(
        code=SuccessCode.RULE_UPDATED,
        message=messages.RULE_UPDATED,
        data=_rule_model(_get_or_404(rule_id)),
    )
