from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, Field

from .config import config
from .schemas import HealthStatus, SummaryLength, SummaryResult
from .services.health import health_status
from .services.summarizer import summarize


class GenerateSummaryInput(BaseModel):
    text: str = Field(..., min_length=1, max_length=config.MAX_TEXT_LENGTH)
    length: SummaryLength = SummaryLength.medium


class HealthInput(BaseModel):
    pass


@dataclass(frozen=True)
class Tool:
    id: str
    name: str
    description: str
    input_schema: Type[BaseModel]
    output_schema: Type[BaseModel]
    fn: Callable[[BaseModel], BaseModel]


TOOLS: List[Tool] = [
    Tool(
        id="summary_generate",
        name="Generate Text Summary",
        description="Generate a summary of provided text with configurable length",
        input_schema=GenerateSummaryInput,
        output_schema=SummaryResult,
        fn=lambda inputs: summarize(inputs.text, inputs.length),
    ),
    Tool(
        id="summary_health",
        name="Check API Health",
        description="Check the health status of the summary API service",
        input_schema=HealthInput,
        output_schema=HealthStatus,
        fn=lambda inputs: health_status(),
    ),
]

_BY_ID: Dict[str, Tool] = {t.id: t for t in TOOLS}


def get_tool(tool_id: str) -> Tool:
    return _BY_ID[tool_id]


def run_tool(tool_id: str, inputs: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Validate inputs, run the tool and return its validated output as a dict.

    Raises KeyError for an unknown id and pydantic.ValidationError for bad inputs.
    """
    tool = get_tool(tool_id)
    parsed = tool.input_schema.model_validate(inputs or {})
    result = tool.fn(parsed)
    out = tool.output_schema.model_validate(result.model_dump())
    return out.model_dump(by_alias=True)
