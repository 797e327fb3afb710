from fastapi import APIRouter

from ..errors import SummaryError
from ..logging import logger
from ..schemas import ErrorBody, SummaryRequest, SummaryResult
from ..services.summarizer import summarize

router = APIRouter(tags=["summary"])


@router.post(
    "/summarize",
    response_model=SummaryResult,
    responses={400: {"model": ErrorBody}, 422: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)
def generate_summary(req: SummaryRequest):
    length = req.resolved_length()
    try:
        result = summarize(req.text, length)
    except SummaryError as e:
        logger.info(
            "summarize.rejected",
            status=e.status_code,
            reason=e.message,
            text_chars=len(req.text or ""),
            length=length,
        )
        raise

    logger.info(
        "summarize.completed",
        text_chars=len(req.text),
        length=length,
        word_count=result.word_count,
        processing_time=result.processing_time,
    )
    return result
