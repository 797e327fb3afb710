import asyncio
from typing import Optional

import httpx
from pydantic import ValidationError

from .config import config
from .logging import logger
from .mock_data import mock_summary
from .schemas import ErrorBody, HealthStatus, SummaryRequest, SummaryResult
from .services.health import health_status

SUMMARIZE_PATH = "/api/summarize"
HEALTH_PATH = "/api/health"


class SummaryApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


async def _sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


class SummaryClient:
    """Async client for the summary API.

    Falls back to canned responses when USE_MOCK_DATA is set or no base URL
    is configured.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        use_mock: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or config.API_BASE_URL or "").rstrip("/")
        self.timeout = timeout if timeout is not None else config.CLIENT_TIMEOUT
        if use_mock is None:
            use_mock = config.USE_MOCK_DATA or not self.base_url
        self.use_mock = use_mock
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SummaryClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            resp = await self._get_client().request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise SummaryApiError("timeout") from e
        except httpx.HTTPError as e:
            raise SummaryApiError(f"request_failed: {e}") from e

        if resp.is_error:
            raise SummaryApiError(_error_message(resp), status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise SummaryApiError("unexpected_response", status_code=resp.status_code) from e

    async def generate_summary(self, request: SummaryRequest) -> SummaryResult:
        if self.use_mock:
            logger.debug("client.mock_summary", length=request.resolved_length())
            return mock_summary(request.resolved_length())

        data = await self._request("POST", SUMMARIZE_PATH, json=request.model_dump(exclude_none=True))
        try:
            return SummaryResult.model_validate(data)
        except ValidationError as e:
            raise SummaryApiError("unexpected_response") from e

    async def check_health(self) -> HealthStatus:
        if self.use_mock:
            return health_status()
        data = await self._request("GET", HEALTH_PATH)
        try:
            return HealthStatus.model_validate(data)
        except ValidationError as e:
            raise SummaryApiError("unexpected_response") from e

    async def generate_summary_with_retry(
        self, request: SummaryRequest, max_retries: Optional[int] = None
    ) -> SummaryResult:
        """Retry generate_summary with exponential backoff (1s, 2s, 4s, ...).

        No wait follows the final attempt; the last error is re-raised.
        """
        attempts = max_retries if max_retries is not None else config.CLIENT_MAX_RETRIES
        last_err: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                return await self.generate_summary(request)
            except Exception as e:
                last_err = e
                if attempt == attempts:
                    break
                delay = 2 ** (attempt - 1)
                logger.warn("client.retrying", attempt=attempt, delay_s=delay, error=str(e))
                await _sleep(delay)

        logger.error("client.retries_exhausted", attempts=attempts, error=str(last_err))
        if last_err is None:
            raise SummaryApiError("Summary generation failed after multiple attempts")
        raise last_err


def _error_message(resp: httpx.Response) -> str:
    try:
        return ErrorBody.model_validate(resp.json()).message
    except (ValueError, ValidationError):
        return f"http_{resp.status_code}"
