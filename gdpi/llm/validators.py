from typing import Any, List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = structlog.get_logger("gdpi.llm.validators")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return ""


class AnalysisPayload(BaseModel):
    """Loose AnalysisResult payload as produced by the app layer or a cache"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    verdict: Optional[str] = None
    price_context: str = Field(default="", alias="priceContext")
    red_flags: List[str] = Field(default_factory=list, alias="redFlags")
    vendor_questions: List[str] = Field(default_factory=list, alias="vendorQuestions")
    next_step: str = Field(default="", alias="nextStep")

    @field_validator("verdict", mode="before")
    @classmethod
    def coerce_verdict(cls, v):
        text = _as_text(v).lower()
        return text or None

    @field_validator("price_context", "next_step", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)

    @field_validator("red_flags", "vendor_questions", mode="before")
    @classmethod
    def coerce_list(cls, v):
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return []
        return [text for text in (_as_text(item) for item in v) if text]

    @classmethod
    def from_loose(cls, data: Any) -> "AnalysisPayload":
        """Validate, falling back to an empty payload on anything unusable"""
        if not isinstance(data, dict):
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.warning("Malformed analysis payload", errors=e.error_count())
            return cls()
