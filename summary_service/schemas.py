from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import config


class SummaryLength(str, Enum):
    short = "short"
    medium = "medium"
    long = "long"


LENGTH_RATIOS = {
    SummaryLength.short: 0.2,
    SummaryLength.medium: 0.4,
    SummaryLength.long: 0.6,
}


class SummaryOptions(BaseModel):
    # Kept as a plain string so an unknown tier reaches the summarizer and
    # is rejected there as unprocessable rather than as a schema error.
    length: Optional[str] = None


class SummaryRequest(BaseModel):
    text: Optional[str] = None
    options: Optional[SummaryOptions] = None

    def resolved_length(self) -> str:
        if self.options and self.options.length:
            return self.options.length
        return config.DEFAULT_LENGTH


class SummaryResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str
    word_count: int = Field(..., ge=0, alias="wordCount")
    processing_time: float = Field(..., ge=0, alias="processingTime")


class HealthStatus(BaseModel):
    status: str = "healthy"
    timestamp: str


class ErrorBody(BaseModel):
    code: int
    message: str


class TextStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    character_count: int = Field(0, ge=0, alias="characterCount")
    word_count: int = Field(0, ge=0, alias="wordCount")
    paragraph_count: int = Field(0, ge=0, alias="paragraphCount")
