"""Pydantic models for HTTP API request/response."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..interfaces import ConfigRecord


# =============================================================================
# Record Models
# =============================================================================

class ConfigRecordResponse(BaseModel):
    """A single stored configuration."""
    resource_id: str = Field(..., alias="resourceId")
    config: dict[str, Any]
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_record(cls, record: ConfigRecord) -> "ConfigRecordResponse":
        return cls(
            resource_id=record.resource_id,
            config=record.config,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


# =============================================================================
# Response Envelopes
# =============================================================================

class ConfigResponse(BaseModel):
    """Envelope around one configuration."""
    success: bool = True
    data: ConfigRecordResponse


class ConfigMutationResponse(ConfigResponse):
    """Envelope around a configuration that was just saved or deleted."""
    message: str


class ConfigListResponse(BaseModel):
    """Envelope around every stored configuration."""
    success: bool = True
    count: int
    data: list[ConfigRecordResponse]


class HealthResponse(BaseModel):
    """Liveness response."""
    status: str = "OK"
    timestamp: datetime
    uptime: float = Field(..., description="Seconds since the app was created")


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    message: str


# =============================================================================
# Guide / Assessment Models
# =============================================================================

GUIDE_FORMATS = ("json", "markdown")


class GuideData(BaseModel):
    """The guide wrapped for JSON clients."""
    title: str
    content: str
    content_type: str = Field(default="markdown", alias="contentType")
    last_modified: datetime = Field(..., alias="lastModified")

    model_config = {"populate_by_name": True}


class GuideResponse(BaseModel):
    data: GuideData


class AssessmentData(BaseModel):
    """Placeholder assessment: echoed input, canned result, guide text."""
    configuration_data: dict[str, Any] = Field(..., alias="configurationData")
    example_assessment: dict[str, Any] = Field(..., alias="exampleAssessment")
    risk_assessment_guide: Optional[str] = Field(default=None, alias="riskAssessmentGuide")

    model_config = {"populate_by_name": True}


class AssessmentResponse(BaseModel):
    data: AssessmentData
