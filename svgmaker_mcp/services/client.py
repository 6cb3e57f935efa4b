# svgmaker_mcp/services/client.py
"""
SVGMaker API client.

One request per operation, no retries. Every response is normalized to an
SvgResult; a response without SVG markup is an error of the same class as a
failed request.
"""

import asyncio
import logging
from typing import Any

import httpx

from svgmaker_mcp.config.schema import DEFAULT_BASE_URL, SvgMakerConfig

from .rate_limiter import AsyncRateLimiter
from .types import ConvertPayload, EditPayload, GeneratePayload, SvgResult

logger = logging.getLogger(__name__)

GENERATE_ENDPOINT = "v1/generate"
EDIT_ENDPOINT = "v1/edit"
CONVERT_ENDPOINT = "v1/convert"


class SvgMakerAPIError(Exception):
    """The API call failed or produced no usable output."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResultError(SvgMakerAPIError):
    """The API call succeeded but returned no SVG markup."""

    def __init__(self) -> None:
        super().__init__("SVGMaker API did not return SVG content.")


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if error:
            return str(error)
        if body.get("message"):
            return str(body["message"])
    return response.reason_phrase


def parse_svg_result(body: Any) -> SvgResult:
    """
    Normalize a JSON response body.

    Accepts both {"data": {...}} envelopes and bare result objects.

    Raises:
        EmptyResultError: If no svgText is present
    """
    if not isinstance(body, dict):
        raise EmptyResultError()

    data = body.get("data") if isinstance(body.get("data"), dict) else body
    svg_text = data.get("svgText")
    if not isinstance(svg_text, str) or not svg_text:
        raise EmptyResultError()

    credit_cost = data.get("creditCost")
    return SvgResult(
        svg_text=svg_text,
        svg_url=data.get("svgUrl"),
        credit_cost=float(credit_cost) if credit_cost is not None else None,
    )


class SvgMakerClient:
    """
    Async SVGMaker API client.

    Shared by all tool calls; each call is an independent request. Requests
    are throttled by a requests-per-minute token bucket.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        rate_limit_rpm: int = 2,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
        rate_limiter: AsyncRateLimiter | None = None,
    ) -> None:
        """
        Initialize SVGMaker client.

        Args:
            api_key: SVGMaker API key (sent as x-api-key)
            base_url: API base URL
            rate_limit_rpm: Maximum requests per minute
            timeout: Overall per-request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
            rate_limiter: Optional limiter override
        """
        self.base_url = base_url.rstrip("/") + "/"
        self.rate_limit_rpm = rate_limit_rpm
        self.timeout = timeout
        self._limiter = rate_limiter or AsyncRateLimiter.per_minute(rate_limit_rpm)
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"x-api-key": api_key, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        logger.info(
            f"SVGMaker client configured: base_url={self.base_url}, "
            f"rate_limit={rate_limit_rpm}rpm, timeout={timeout}s"
        )

    @classmethod
    def from_config(cls, config: SvgMakerConfig, api_key: str) -> "SvgMakerClient":
        return cls(
            api_key=api_key,
            base_url=config.api.base_url,
            rate_limit_rpm=config.api.rate_limit_rpm,
            timeout=config.api.timeout,
        )

    async def generate(self, payload: GeneratePayload) -> SvgResult:
        """Generate an SVG from a text prompt."""
        return await self._post("generate", GENERATE_ENDPOINT, json=payload.to_json())

    async def edit(self, payload: EditPayload) -> SvgResult:
        """Edit an existing image/SVG with a text prompt."""
        return await self._post(
            "edit", EDIT_ENDPOINT, data=payload.to_form(), files=payload.to_files()
        )

    async def convert(self, payload: ConvertPayload) -> SvgResult:
        """Convert a raster image to SVG."""
        return await self._post(
            "convert", CONVERT_ENDPOINT, data=payload.to_form(), files=payload.to_files()
        )

    async def _post(self, operation: str, endpoint: str, **kwargs) -> SvgResult:
        await self._limiter.acquire()
        logger.info(f"SVGMaker {operation}: POST {endpoint}")

        try:
            response = await asyncio.wait_for(
                self._http.post(endpoint, **kwargs), timeout=self.timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise SvgMakerAPIError(
                f"SVGMaker API request timed out after {self.timeout:g}s"
            ) from e
        except httpx.HTTPError as e:
            raise SvgMakerAPIError(f"SVGMaker API request failed: {e}") from e

        if response.is_error:
            detail = _error_detail(response)
            logger.error(f"SVGMaker {operation} failed: {response.status_code} {detail}")
            raise SvgMakerAPIError(
                f"SVGMaker API error ({response.status_code}): {detail}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise SvgMakerAPIError("SVGMaker API returned an invalid JSON response") from e

        result = parse_svg_result(body)
        logger.info(f"SVGMaker {operation}: received {len(result.svg_text)} chars of SVG")
        return result

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> "SvgMakerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
