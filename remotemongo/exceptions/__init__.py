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

from dataclasses import dataclass
from typing import Any

import httpx

from remotemongo.constants import ErrorKind


def _kind_value(kind: str | ErrorKind) -> str:
    return kind.value if isinstance(kind, ErrorKind) else kind


@dataclass
class AppError(Exception):
    """
    Any error surfaced by a collection operation, be it reported by the
    invocation channel or synthesized locally while encoding the request
    or decoding the response.

    Errors reported by a channel are opaque to this library: they are handed
    back to the caller as the very same object, never rewrapped.

    Attributes:
        kind: a short string categorizing the error (see `ErrorKind`).
        message: a human-readable description of the error.
    """

    kind: str
    message: str

    def __init__(self, kind: str | ErrorKind, message: str) -> None:
        # not super(): subclasses may also inherit from httpx exceptions
        Exception.__init__(self, message)
        self.kind = _kind_value(kind)
        self.message = message

    def __str__(self) -> str:
        return self.message


@dataclass
class MalformedJSONError(AppError):
    """
    Some JSON text could not be parsed, or a parsed response did not have
    the expected shape. This is raised either before any remote call is made
    (bad filter, update, document, projection, sort or pipeline text) or after
    a successful call returning an unusable payload.

    Attributes:
        kind: always "malformed_json".
        message: the underlying parser diagnostic.
        json_text: the offending text, when available.
    """

    json_text: str | None

    def __init__(self, message: str, *, json_text: str | None = None) -> None:
        super().__init__(ErrorKind.MALFORMED_JSON, message)
        self.json_text = json_text


@dataclass
class FunctionCallError(AppError):
    """
    A failure reported by an invocation channel while calling a remote function.

    Attributes:
        kind: the failure category, e.g. "http" or "timeout".
        message: a text message about the failure.
        function_name: the remote function being called, if known.
    """

    function_name: str | None

    def __init__(
        self,
        kind: str | ErrorKind,
        message: str,
        *,
        function_name: str | None = None,
    ) -> None:
        super().__init__(kind, message)
        self.function_name = function_name


@dataclass
class FunctionCallHttpError(FunctionCallError, httpx.HTTPStatusError):
    """
    A function call resulted in an HTTP 4xx or 5xx response.

    The service usually describes the failure in a JSON body such as
    `{"error": "...", "error_code": "..."}`: when that is the case, its
    contents are exposed here, while the exception remains (a subclass of)
    `httpx.HTTPStatusError`.

    Attributes:
        error_code: the "error_code" found in the response body, if any.
        status_code: the HTTP status code of the response.
    """

    error_code: str | None
    status_code: int | None

    def __init__(
        self,
        message: str,
        *,
        httpx_error: httpx.HTTPStatusError,
        error_code: str | None = None,
        function_name: str | None = None,
    ) -> None:
        FunctionCallError.__init__(
            self, ErrorKind.HTTP, message, function_name=function_name
        )
        httpx.HTTPStatusError.__init__(
            self,
            message=str(httpx_error),
            request=httpx_error.request,
            response=httpx_error.response,
        )
        self.message = message
        self.httpx_error = httpx_error
        self.error_code = error_code
        self.status_code = getattr(httpx_error.response, "status_code", None)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_httpx_error(
        cls,
        httpx_error: httpx.HTTPStatusError,
        **kwargs: Any,
    ) -> FunctionCallHttpError:
        """Parse a httpx status error into this exception."""

        raw_response: dict[str, Any]
        # the attempt to extract a response structure cannot afford failure.
        try:
            raw_response = httpx_error.response.json() or {}
            if not isinstance(raw_response, dict):
                raw_response = {}
        except Exception:
            raw_response = {}
        service_message = raw_response.get("error")
        error_code = raw_response.get("error_code")
        if service_message:
            message = f"{service_message}. {str(httpx_error)}"
        else:
            message = str(httpx_error)

        return cls(
            message,
            httpx_error=httpx_error,
            error_code=error_code if isinstance(error_code, str) else None,
            **kwargs,
        )


@dataclass
class FunctionCallTimeoutError(FunctionCallError):
    """
    A function call did not complete within the channel's request timeout.

    Attributes:
        timeout_ms: the timeout in force for the request, in milliseconds.
    """

    timeout_ms: int | None

    def __init__(
        self,
        message: str,
        *,
        timeout_ms: int | None = None,
        function_name: str | None = None,
    ) -> None:
        super().__init__(ErrorKind.TIMEOUT, message, function_name=function_name)
        self.timeout_ms = timeout_ms

    @classmethod
    def from_httpx_error(
        cls,
        httpx_error: httpx.TimeoutException,
        **kwargs: Any,
    ) -> FunctionCallTimeoutError:
        """Convert a httpx timeout into this exception."""

        timeout_ms = kwargs.get("timeout_ms")
        timeout_desc = f" (timeout: {timeout_ms} ms)" if timeout_ms else ""
        return cls(
            f"{type(httpx_error).__name__}{timeout_desc}: {httpx_error}",
            **kwargs,
        )


@dataclass
class FunctionCallNetworkError(FunctionCallError):
    """
    A function call could not be delivered, e.g. because of a refused
    connection or a broken stream.
    """

    def __init__(self, message: str, *, function_name: str | None = None) -> None:
        super().__init__(ErrorKind.NETWORK, message, function_name=function_name)

    @classmethod
    def from_httpx_error(
        cls,
        httpx_error: httpx.TransportError,
        **kwargs: Any,
    ) -> FunctionCallNetworkError:
        """Convert a httpx transport error into this exception."""

        return cls(f"{type(httpx_error).__name__}: {httpx_error}", **kwargs)


@dataclass
class CompletionAlreadyFiredError(AppError):
    """
    A callback-style transport tried to complete the same function call twice.
    """

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.COMPLETION, message)


__all__ = [
    "AppError",
    "CompletionAlreadyFiredError",
    "FunctionCallError",
    "FunctionCallHttpError",
    "FunctionCallNetworkError",
    "FunctionCallTimeoutError",
    "MalformedJSONError",
]
