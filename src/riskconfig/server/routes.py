"""API route handlers."""

import time
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response
from fastapi.responses import PlainTextResponse

from ..interfaces import ConfigRecord, IConfigStore
from ..services.guide import build_example_assessment, load_guide
from .config import GuideConfig
from .errors import NotFoundError, ValidationError
from .models import (
    GUIDE_FORMATS,
    AssessmentData,
    AssessmentResponse,
    ConfigListResponse,
    ConfigMutationResponse,
    ConfigRecordResponse,
    ConfigResponse,
    ErrorResponse,
    GuideData,
    GuideResponse,
    HealthResponse,
)

router = APIRouter()

ERROR_RESPONSES = {404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}}

INVALID_RESOURCE_ID = "Invalid or missing resourceId"


def get_store(request: Request) -> IConfigStore:
    """Dependency injection for the configuration store owned by the app."""
    return request.app.state.store


def get_guide_config(request: Request) -> GuideConfig:
    return request.app.state.config.guide


def _require_resource_id(value: Any, in_body: bool = False) -> str:
    """Validate a resource identifier, raising 400 if blank or not a string."""
    if not isinstance(value, str) or not value.strip():
        message = "resourceId must be a non-empty string"
        if in_body:
            message = "resourceId must be provided as a non-empty string in the request body"
        raise ValidationError(message, error=INVALID_RESOURCE_ID)
    return value


def _split_body(payload: Optional[dict[str, Any]]) -> tuple[str, dict[str, Any]]:
    """Split ``{resourceId, ...config}`` into its key and config payload."""
    payload = dict(payload or {})
    resource_id = _require_resource_id(payload.pop("resourceId", None), in_body=True)
    if not payload:
        raise ValidationError(
            "Request body must contain configuration data along with resourceId"
        )
    return resource_id, payload


def _require_config(payload: Optional[dict[str, Any]]) -> dict[str, Any]:
    if not payload:
        raise ValidationError("Request body must contain configuration data")
    return payload


def _not_found(resource_id: str) -> NotFoundError:
    return NotFoundError(f"Configuration for resourceId '{resource_id}' does not exist")


def _saved(record: ConfigRecord, response: Response, always_update: bool = False) -> ConfigMutationResponse:
    """Build the save envelope; 201 for a first save unless ``always_update``."""
    if always_update or record.is_update:
        message = "Configuration updated successfully"
        response.status_code = 200
    else:
        message = "Configuration created successfully"
        response.status_code = 201
    return ConfigMutationResponse(
        message=message,
        data=ConfigRecordResponse.from_record(record),
    )


# =============================================================================
# System
# =============================================================================

@router.get("/health", response_model=HealthResponse, tags=["system"])
async def health(request: Request) -> HealthResponse:
    """Liveness check. Does not touch the store."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        uptime=time.monotonic() - request.app.state.started_at,
    )


# =============================================================================
# Risk assessment guide (static documentation)
# =============================================================================

@router.get("/risk-assessment-guide", response_model=GuideResponse, tags=["guide"])
@router.get("/assess-risk", response_model=GuideResponse, tags=["guide"], deprecated=True)
async def risk_assessment_guide(
    output_format: str = Query(default="json", alias="format", description="json | markdown"),
    guide_config: GuideConfig = Depends(get_guide_config),
):
    """Serve the risk assessment guide as JSON or raw markdown."""
    if output_format not in GUIDE_FORMATS:
        raise ValidationError(
            f"Unsupported format '{output_format}'. Use 'json' or 'markdown'",
            error="Invalid format",
        )

    guide = load_guide(guide_config.path, guide_config.title)
    if guide is None:
        raise NotFoundError(
            "Risk assessment guide documentation file not found",
            error="Documentation not found",
        )

    if output_format == "markdown":
        return PlainTextResponse(guide.content, media_type="text/markdown; charset=utf-8")

    return GuideResponse(
        data=GuideData(
            title=guide.title,
            content=guide.content,
            content_type=guide.content_type,
            last_modified=guide.last_modified,
        )
    )


@router.post("/configs/assess-risk", response_model=AssessmentResponse, tags=["guide"])
@router.post("/assess-risk", response_model=AssessmentResponse, tags=["guide"], deprecated=True)
async def assess_risk(
    payload: Optional[dict[str, Any]] = Body(default=None),
    guide_config: GuideConfig = Depends(get_guide_config),
) -> AssessmentResponse:
    """Return a canned example assessment for ``newConfig``.

    Placeholder only: no scoring happens.
    """
    new_config = (payload or {}).get("newConfig")
    if not new_config or not isinstance(new_config, dict):
        raise ValidationError("newConfig is required for risk assessment")

    guide = load_guide(guide_config.path, guide_config.title)
    return AssessmentResponse(
        data=AssessmentData(
            configuration_data=new_config,
            example_assessment=build_example_assessment(new_config),
            risk_assessment_guide=guide.content if guide else None,
        )
    )


# =============================================================================
# Configurations
# =============================================================================

@router.get("/configs", response_model=ConfigListResponse, tags=["configs"])
async def list_configs(store: IConfigStore = Depends(get_store)) -> ConfigListResponse:
    """Get all configurations."""
    records = store.get_all()
    return ConfigListResponse(
        count=len(records),
        data=[ConfigRecordResponse.from_record(r) for r in records],
    )


@router.get("/configs/{resource_id}", response_model=ConfigResponse, responses=ERROR_RESPONSES, tags=["configs"])
async def get_config(
    resource_id: str,
    store: IConfigStore = Depends(get_store),
) -> ConfigResponse:
    """Get the configuration for one resource."""
    _require_resource_id(resource_id)
    record = store.get(resource_id)
    if record is None:
        raise _not_found(resource_id)
    return ConfigResponse(data=ConfigRecordResponse.from_record(record))


@router.post("/configs", response_model=ConfigMutationResponse, status_code=201, tags=["configs"])
async def create_config(
    response: Response,
    payload: Optional[dict[str, Any]] = Body(default=None),
    store: IConfigStore = Depends(get_store),
) -> ConfigMutationResponse:
    """Save a configuration keyed by ``resourceId`` in the body.

    Responds 201 on the first save for a key and 200 afterwards.
    """
    resource_id, config = _split_body(payload)
    return _saved(store.save(resource_id, config), response)


@router.put("/configs", response_model=ConfigMutationResponse, tags=["configs"])
async def update_config(
    response: Response,
    payload: Optional[dict[str, Any]] = Body(default=None),
    store: IConfigStore = Depends(get_store),
) -> ConfigMutationResponse:
    """Replace a configuration keyed by ``resourceId`` in the body."""
    resource_id, config = _split_body(payload)
    return _saved(store.save(resource_id, config), response, always_update=True)


@router.delete("/configs", response_model=ConfigMutationResponse, responses=ERROR_RESPONSES, tags=["configs"])
async def delete_config(
    payload: Optional[dict[str, Any]] = Body(default=None),
    store: IConfigStore = Depends(get_store),
) -> ConfigMutationResponse:
    """Delete a configuration keyed by ``resourceId`` in the body."""
    resource_id = _require_resource_id((payload or {}).get("resourceId"), in_body=True)
    return _deleted(store, resource_id)


# Legacy aliases: resource id in the path, body is the whole config.

@router.post(
    "/configs/{resource_id}",
    response_model=ConfigMutationResponse,
    status_code=201,
    tags=["configs"],
    deprecated=True,
)
async def create_config_legacy(
    resource_id: str,
    response: Response,
    payload: Optional[dict[str, Any]] = Body(default=None),
    store: IConfigStore = Depends(get_store),
) -> ConfigMutationResponse:
    _require_resource_id(resource_id)
    config = _require_config(payload)
    return _saved(store.save(resource_id, config), response)


@router.put(
    "/configs/{resource_id}",
    response_model=ConfigMutationResponse,
    tags=["configs"],
    deprecated=True,
)
async def update_config_legacy(
    resource_id: str,
    response: Response,
    payload: Optional[dict[str, Any]] = Body(default=None),
    store: IConfigStore = Depends(get_store),
) -> ConfigMutationResponse:
    _require_resource_id(resource_id)
    config = _require_config(payload)
    return _saved(store.save(resource_id, config), response, always_update=True)


@router.delete(
    "/configs/{resource_id}",
    response_model=ConfigMutationResponse,
    tags=["configs"],
    deprecated=True,
)
async def delete_config_legacy(
    resource_id: str,
    store: IConfigStore = Depends(get_store),
) -> ConfigMutationResponse:
    _require_resource_id(resource_id)
    return _deleted(store, resource_id)


def _deleted(store: IConfigStore, resource_id: str) -> ConfigMutationResponse:
    record = store.delete(resource_id)
    if record is None:
        raise _not_found(resource_id)
    return ConfigMutationResponse(
        message="Configuration deleted successfully",
        data=ConfigRecordResponse.from_record(record),
    )
