"""
University backend REST client.

Every call carries the signed-in user's bearer token. Responses use the
backend's envelope: {"success": bool, "data": ..., "message": "..."}.
Failures are raised as UpstreamError subclasses carrying the generic
message of the operation that failed.
"""
import time
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from karoli_portal.core.config import settings
from karoli_portal.core.exceptions import ApiEnvelopeError, ApiRequestError, ApiResponseError
from karoli_portal.core.logging_config import logger

ModelT = TypeVar("ModelT", bound=BaseModel)


def clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop query parameters that were not set"""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None and value != ""}


def parse_model(model: Type[ModelT], data: Any, error_message: str) -> ModelT:
    """Validate envelope data into a DTO; malformed data is a response error"""
    try:
        return model.model_validate(data or {})
    except ValidationError as e:
        raise ApiResponseError(error_message, reason=str(e)) from e


def parse_list(model: Type[ModelT], data: Any, error_message: str) -> List[ModelT]:
    if not data:
        return []
    if not isinstance(data, list):
        raise ApiResponseError(error_message, reason=f"expected a list, got {type(data).__name__}")
    try:
        return [model.model_validate(item) for item in data]
    except ValidationError as e:
        raise ApiResponseError(error_message, reason=str(e)) from e


class UniversityRestClient:
    def __init__(
        self,
        token: str,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url if base_url is not None else settings.university_api_url).rstrip("/")
        self.token = token
        self.timeout = settings.university_timeout_seconds
        self.verify_ssl = settings.university_verify_ssl
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(self.timeout),
            verify=self.verify_ssl,
            transport=transport,
        )

    async def __aenter__(self) -> "UniversityRestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        error_message: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body"""
        start = time.perf_counter()
        try:
            response = await self._client.request(
                method, path, params=clean_params(params), json=json
            )
        except httpx.HTTPError as e:
            logger.log_upstream_call(method, path, None, (time.perf_counter() - start) * 1000,
                                     error=type(e).__name__)
            raise ApiResponseError(error_message, reason=str(e)) from e

        logger.log_upstream_call(method, path, response.status_code,
                                 (time.perf_counter() - start) * 1000)

        if not response.is_success:
            raise ApiRequestError(error_message, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseError(error_message, reason="response body is not JSON") from e

    async def fetch_data(
        self,
        method: str,
        path: str,
        *,
        error_message: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and unwrap the envelope's data"""
        body = await self.request(method, path, error_message=error_message, params=params, json=json)
        if not isinstance(body, dict) or not body.get("success"):
            message = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("error")
            raise ApiEnvelopeError(message or error_message)
        return body.get("data")

    async def fetch_model(self, model: Type[ModelT], method: str, path: str, *, error_message: str,
                          params: Optional[Dict[str, Any]] = None) -> ModelT:
        data = await self.fetch_data(method, path, error_message=error_message, params=params)
        return parse_model(model, data, error_message)

    async def fetch_list(self, model: Type[ModelT], method: str, path: str, *, error_message: str,
                         params: Optional[Dict[str, Any]] = None) -> List[ModelT]:
        data = await self.fetch_data(method, path, error_message=error_message, params=params)
        return parse_list(model, data, error_message)

    async def ping(self) -> dict:
        # Wiring check only, no network I/O
        return {
            "ok": bool(self.base_url),
            "mode": "rest",
            "base_url_set": bool(self.base_url),
            "token_set": bool(self.token),
        }
