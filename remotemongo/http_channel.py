# Copyright DataStax, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any

import httpx

from remotemongo.arguments import parse_json_text
from remotemongo.channel import FunctionChannel, FunctionResponse
from remotemongo.exceptions import (
    FunctionCallHttpError,
    FunctionCallNetworkError,
    FunctionCallTimeoutError,
    MalformedJSONError,
)
from remotemongo.options import HttpChannelOptions
from remotemongo.settings.defaults import (
    DEFAULT_AUTH_HEADER,
    DEFAULT_AUTH_PREFIX,
    DEFAULT_REDACTED_HEADER_NAMES,
    DEFAULT_REQUEST_TIMEOUT_MS,
    DEFAULT_SERVICE_NAME,
    FIXED_SECRET_PLACEHOLDER,
    FUNCTION_CALL_PATH_TEMPLATE,
)
from remotemongo.utils.request_tools import (
    HttpMethod,
    log_httpx_request,
    log_httpx_response,
    to_httpx_timeout,
)

logger = logging.getLogger(__name__)


class HttpFunctionChannel(FunctionChannel):
    """
    A function channel issuing each call as an HTTP POST to the
    function-call endpoint of an application.

    The request body is the argument document, with the function name and
    the service name added to it; the response body is the payload.
    Failures (HTTP error statuses, timeouts, network errors) are reported
    in the FunctionResponse and never raised.

    Args:
        base_url: the root URL of the application server,
            e.g. "https://services.cloud.example.com".
        app_id: the application identifier.
        access_token: a bearer token authorizing the calls. Obtaining and
            refreshing it is up to the caller.
        options: an HttpChannelOptions object to customize timeout,
            service name and headers.

    Example:
        >>> channel = HttpFunctionChannel(
        ...     base_url="https://services.cloud.example.com",
        ...     app_id="myapp-abcde",
        ...     access_token="eyJhbGciOi...",
        ... )
        >>> response = await channel.call_function("count", arguments_json)
    """

    def __init__(
        self,
        *,
        base_url: str,
        app_id: str,
        access_token: str,
        options: HttpChannelOptions | None = None,
    ) -> None:
        self.async_client = httpx.AsyncClient()
        self.base_url = base_url.rstrip("/")
        self.app_id = app_id
        self.options = options or HttpChannelOptions()
        self.request_timeout_ms: int = (
            self.options.request_timeout_ms
            if self.options.request_timeout_ms is not None
            else DEFAULT_REQUEST_TIMEOUT_MS
        )
        self.service_name: str = self.options.service_name or DEFAULT_SERVICE_NAME
        self.full_url = self.base_url + FUNCTION_CALL_PATH_TEMPLATE.format(
            app_id=app_id
        )
        self.full_headers: dict[str, str] = {
            k: v
            for k, v in {
                **{
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    DEFAULT_AUTH_HEADER: f"{DEFAULT_AUTH_PREFIX}{access_token}",
                },
                **self.options.headers,
            }.items()
            if v is not None
        }
        upper_redacted_header_names = {
            header_name.upper()
            for header_name in (
                set(self.options.redacted_header_names) | DEFAULT_REDACTED_HEADER_NAMES
            )
        }
        self._loggable_headers = {
            k: v
            if k.upper() not in upper_redacted_header_names
            else FIXED_SECRET_PLACEHOLDER
            for k, v in self.full_headers.items()
        }

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(url="{self.full_url}", '
            f'service_name="{self.service_name}")'
        )

    async def __aenter__(self) -> HttpFunctionChannel:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the underlying HTTP connections."""
        await self.async_client.aclose()

    def _encode_payload(self, name: str, arguments_json: str) -> FunctionResponse | str:
        arguments = parse_json_text(arguments_json)
        if arguments.error is not None:
            return FunctionResponse(error=arguments.error)
        if not isinstance(arguments.value, dict):
            return FunctionResponse(
                error=MalformedJSONError(
                    "The argument document must be a JSON object.",
                    json_text=arguments_json,
                )
            )
        payload: dict[str, Any] = {
            "name": name,
            "service": self.service_name,
            **arguments.value,
        }
        return json.dumps(
            payload,
            allow_nan=False,
            separators=(",", ":"),
            ensure_ascii=False,
        )

    async def call_function(self, name: str, arguments_json: str) -> FunctionResponse:
        encoded_payload = self._encode_payload(name, arguments_json)
        if isinstance(encoded_payload, FunctionResponse):
            return encoded_payload

        log_httpx_request(
            http_method=HttpMethod.POST,
            full_url=self.full_url,
            redacted_request_headers=self._loggable_headers,
            encoded_payload=encoded_payload,
            request_timeout_ms=self.request_timeout_ms,
        )
        try:
            raw_response = await self.async_client.request(
                method=HttpMethod.POST,
                url=self.full_url,
                content=encoded_payload.encode(),
                timeout=to_httpx_timeout(self.request_timeout_ms),
                headers=self.full_headers,
            )
        except httpx.TimeoutException as timeout_exc:
            logger.warning(f"Function '{name}' timed out: {timeout_exc}")
            return FunctionResponse(
                error=FunctionCallTimeoutError.from_httpx_error(
                    timeout_exc,
                    timeout_ms=self.request_timeout_ms,
                    function_name=name,
                )
            )
        except httpx.TransportError as transport_exc:
            logger.warning(f"Function '{name}' could not be called: {transport_exc}")
            return FunctionResponse(
                error=FunctionCallNetworkError.from_httpx_error(
                    transport_exc,
                    function_name=name,
                )
            )

        log_httpx_response(response=raw_response)
        try:
            raw_response.raise_for_status()
        except httpx.HTTPStatusError as http_exc:
            logger.warning(
                f"Function '{name}' returned HTTP {raw_response.status_code}"
            )
            return FunctionResponse(
                error=FunctionCallHttpError.from_httpx_error(
                    http_exc,
                    function_name=name,
                ),
                value=raw_response.text or None,
            )
        return FunctionResponse(value=raw_response.text or None)
