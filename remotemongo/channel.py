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

"""
The contract of the invocation channel, i.e. the transport able to call
a named remote function with JSON arguments and to report back either
a JSON payload or an error.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from remotemongo.exceptions import AppError, CompletionAlreadyFiredError

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[Optional[AppError], Optional[str]], None]
InvokeFunction = Callable[[str, str, CompletionCallback], None]


@dataclass(frozen=True)
class FunctionResponse:
    """
    What a channel reports for a function call.

    Attributes:
        error: the failure reported by the transport, None on success.
        value: the response payload as JSON text, if any. A payload may
            accompany an error as well: it is then ignored.
    """

    error: AppError | None = None
    value: str | None = None


class FunctionChannel(ABC):
    """
    An asynchronous transport for remote function calls.

    Implementations perform no retries, and no ordering is guaranteed
    between calls issued concurrently. Each call completes exactly once,
    by returning a FunctionResponse: transport failures are reported in it
    rather than raised.
    """

    @abstractmethod
    async def call_function(self, name: str, arguments_json: str) -> FunctionResponse:
        """
        Call a remote function.

        Args:
            name: the name of the function, e.g. "findOne".
            arguments_json: the argument document, as JSON text.

        Returns:
            a FunctionResponse with either an error or the response payload.
        """
        ...


class CompletionToken:
    """
    A single-use completion callback resolving an asyncio future.

    The token may be invoked from any thread: the future is always resolved
    on the thread running its event loop. Any invocation after the first one
    raises CompletionAlreadyFiredError.
    """

    __slots__ = ("_loop", "_future", "_lock", "_fired", "_function_name")

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        future: asyncio.Future[FunctionResponse],
        function_name: str,
    ) -> None:
        self._loop = loop
        self._future = future
        self._lock = threading.Lock()
        self._fired = False
        self._function_name = function_name

    @property
    def fired(self) -> bool:
        return self._fired

    def __call__(self, error: AppError | None = None, value: str | None = None) -> None:
        with self._lock:
            if self._fired:
                raise CompletionAlreadyFiredError(
                    f"Completion for function '{self._function_name}' "
                    "was invoked more than once."
                )
            self._fired = True
        self._loop.call_soon_threadsafe(
            self._resolve, FunctionResponse(error=error, value=value)
        )

    def _resolve(self, response: FunctionResponse) -> None:
        if self._future.cancelled():
            logger.debug(
                f"Discarding response to '{self._function_name}': call was cancelled"
            )
            return
        self._future.set_result(response)


class CallbackFunctionChannel(FunctionChannel):
    """
    A channel wrapping a callback-style transport, i.e. a callable
    `invoke(name, arguments_json, completion)` which eventually calls
    `completion(error, value)`, possibly from another thread.

    Example:
        >>> def invoke(name, arguments_json, completion):
        ...     completion(None, '{"$numberLong": "3"}')
        ...
        >>> channel = CallbackFunctionChannel(invoke)
        >>> await channel.call_function("count", '{"arguments": []}')
        FunctionResponse(error=None, value='{"$numberLong": "3"}')
    """

    def __init__(self, invoke: InvokeFunction) -> None:
        self.invoke = invoke

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(invoke={self.invoke!r})"

    async def call_function(self, name: str, arguments_json: str) -> FunctionResponse:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[FunctionResponse] = loop.create_future()
        self.invoke(name, arguments_json, CompletionToken(loop, future, name))
        return await future
