"""Code generation API endpoints."""

from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Request

from questsmith.api.schemas import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    ValidateResponse,
)
from questsmith.core.blueprint.loader import npc_from_dict, quest_from_dict
from questsmith.core.codegen.errors import BlueprintLoadError, CodeGenerationError
from questsmith.core.logging import get_logger
from questsmith.services.generation_service import Blueprint, GenerationService

logger = get_logger(__name__)

router = APIRouter(tags=["generate"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_generation_service(request: Request) -> GenerationService:
    """GenerationService instance (dependency injection)"""
    service: GenerationService = request.app.state.generation_service
    return service


def _load(loader: Callable[[Any], Blueprint], document: dict[str, Any]) -> Blueprint:
    try:
        return loader(document)
    except BlueprintLoadError as e:
        logger.warning("Rejected blueprint document: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


def _generate(
    service: GenerationService,
    loader: Callable[[Any], Blueprint],
    request: GenerateRequest,
) -> GenerateResponse:
    blueprint = _load(loader, request.blueprint)
    try:
        result = service.generate(blueprint)
    except CodeGenerationError as e:
        logger.error("Code generation failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return GenerateResponse(
        success=True,
        class_name=result.class_name,
        source=result.source,
        warnings=result.warnings,
    )


def _validate(
    service: GenerationService,
    loader: Callable[[Any], Blueprint],
    request: GenerateRequest,
) -> ValidateResponse:
    validation = service.validate(_load(loader, request.blueprint))
    return ValidateResponse(
        is_valid=validation.is_valid,
        errors=validation.errors,
        warnings=validation.warnings,
    )


@router.post(
    "/generate/quest", response_model=GenerateResponse, responses=_ERROR_RESPONSES
)
def generate_quest(
    request: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
) -> GenerateResponse:
    """
    Generate a Quest subclass

    The blueprint uses the project-file shape (className, questId,
    objectives[], questTriggers[], ...).
    """
    return _generate(service, quest_from_dict, request)


@router.post(
    "/generate/npc", response_model=GenerateResponse, responses=_ERROR_RESPONSES
)
def generate_npc(
    request: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
) -> GenerateResponse:
    """Generate an NPC subclass"""
    return _generate(service, npc_from_dict, request)


@router.post(
    "/validate/quest",
    response_model=ValidateResponse,
    responses={422: {"model": ErrorResponse}},
)
def validate_quest(
    request: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
) -> ValidateResponse:
    """Advisory validation of a quest blueprint"""
    return _validate(service, quest_from_dict, request)


@router.post(
    "/validate/npc",
    response_model=ValidateResponse,
    responses={422: {"model": ErrorResponse}},
)
def validate_npc(
    request: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
) -> ValidateResponse:
    """Advisory validation of an NPC blueprint"""
    return _validate(service, npc_from_dict, request)
