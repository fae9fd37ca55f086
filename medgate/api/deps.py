"""API dependencies.

Collaborators are created once per application by ``create_app`` and kept on
``app.state``; routes receive them through these functions, which tests can
replace with ``app.dependency_overrides``.
"""
from fastapi import Request

from medgate.services.authorization import AuthorizationEvaluator
from medgate.services.cache import ReferenceDataCache
from medgate.services.projections import CapabilityProjector
from medgate.services.reference_data import ReferenceDataService


def get_evaluator(request: Request) -> AuthorizationEvaluator:
    return request.app.state.evaluator


def get_reference_cache(request: Request) -> ReferenceDataCache:
    return request.app.state.reference_cache


def get_reference_data_service(request: Request) -> ReferenceDataService:
    return request.app.state.reference_data


def get_projector(request: Request) -> CapabilityProjector:
    return request.app.state.projector
