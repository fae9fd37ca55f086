"""Access decision and capability API endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from medgate import schemas
from medgate.api.deps import get_evaluator, get_projector
from medgate.core.errors import PermissionConfigError
from medgate.core.logging_config import logger
from medgate.core.permissions import RouteDecision
from medgate.services.authorization import AuthorizationEvaluator
from medgate.services.projections import CapabilityProjector

router = APIRouter()


def _principal_label(principal) -> str:
    return f"{principal.role}#{principal.id}" if principal else "anonymous"


def evaluate_action(
    request: schemas.ActionAccessRequest,
    evaluator: AuthorizationEvaluator
) -> schemas.AccessResponse:
    """Evaluates one (category, action) check; configuration errors become 400."""
    try:
        decision = evaluator.can_perform(request.principal, request.category, request.action)
    except PermissionConfigError as e:
        logger.error(f"Invalid permission check: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    target = f"{request.category.value}.{request.action.value}"
    if request.principal is None:
        reason = f"Unauthenticated: {target} requires a principal."
    elif decision:
        reason = f"Role {request.principal.role!r} is allowed {target}."
    else:
        reason = f"Role {request.principal.role!r} is not allowed {target}."
    logger.info(f"Action check: {_principal_label(request.principal)} {target} -> {decision}")
    return schemas.AccessResponse(decision=decision, reason=reason)


@router.post("/access/action", response_model=schemas.AccessResponse)
def check_action(
    request: schemas.ActionAccessRequest,
    evaluator: AuthorizationEvaluator = Depends(get_evaluator)
):
    """Can the principal perform an action on a resource category?"""
    return evaluate_action(request, evaluator)


@router.post("/access/batch", response_model=List[schemas.AccessResponse])
def check_action_batch(
    requests: List[schemas.ActionAccessRequest],
    evaluator: AuthorizationEvaluator = Depends(get_evaluator)
):
    """Evaluates several action checks in one call."""
    return [evaluate_action(req, evaluator) for req in requests]


@router.post("/access/route", response_model=schemas.RouteAccessResponse)
def check_route(
    request: schemas.RouteAccessRequest,
    evaluator: AuthorizationEvaluator = Depends(get_evaluator)
):
    """Classifies a path into its access tier and decides for the principal."""
    tier = evaluator.route_tier(request.path)
    decision = evaluator.classify_route(request.principal, request.path)

    if tier is None:
        reason = "Implicit Deny: path matches no route pattern."
    elif decision is RouteDecision.ALLOWED:
        reason = f"Allowed by {tier.value} route tier."
    elif request.principal is None:
        reason = f"Unauthenticated: {tier.value} routes require a principal."
    else:
        reason = f"Role {request.principal.role!r} is not admitted to {tier.value} routes."

    logger.info(f"Route check: {_principal_label(request.principal)} {request.path} -> {decision.value}")
    return schemas.RouteAccessResponse(path=request.path, tier=tier, decision=decision, reason=reason)


@router.post("/access/endpoint", response_model=schemas.AccessResponse)
def check_endpoint(
    request: schemas.EndpointAccessRequest,
    evaluator: AuthorizationEvaluator = Depends(get_evaluator)
):
    """Can the principal call a backend endpoint (method + path template)?"""
    try:
        decision = evaluator.can_call_endpoint(request.principal, request.method, request.endpoint)
    except PermissionConfigError as e:
        logger.error(f"Invalid endpoint check: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    target = f"{request.method.upper()} {request.endpoint}"
    reason = f"{'Allowed' if decision else 'Denied'}: {target} for {_principal_label(request.principal)}."
    return schemas.AccessResponse(decision=decision, reason=reason)


@router.post("/capabilities", response_model=schemas.CapabilitiesResponse)
def get_capabilities(
    request: schemas.CapabilitiesRequest,
    projector: CapabilityProjector = Depends(get_projector)
):
    """Capability flags, navigation menu and landing route for the principal."""
    return schemas.CapabilitiesResponse(
        capabilities=projector.capabilities(request.principal),
        menu=projector.navigation_menu(request.principal),
        default_route=projector.default_route(request.principal),
    )
