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
remotemongo: typed collection operations over a remote function-call channel.

Example:
    import asyncio

    from remotemongo import HttpFunctionChannel, RemoteCollection

    async def main():
        async with HttpFunctionChannel(
            base_url="https://services.cloud.example.com",
            app_id="myapp-abcde",
            access_token="...",
        ) as channel:
            items = RemoteCollection(channel, database_name="shop", name="items")
            await items.insert_many(['{"sku": "A-1"}', '{"sku": "B-2"}'])
            print(await items.count("{}"))

    asyncio.run(main())
"""

from __future__ import annotations

from remotemongo.channel import (
    CallbackFunctionChannel,
    CompletionToken,
    FunctionChannel,
    FunctionResponse,
)
from remotemongo.collection import RemoteCollection
from remotemongo.constants import ErrorKind, FunctionName
from remotemongo.exceptions import (
    AppError,
    CompletionAlreadyFiredError,
    FunctionCallError,
    FunctionCallHttpError,
    FunctionCallNetworkError,
    FunctionCallTimeoutError,
    MalformedJSONError,
)
from remotemongo.http_channel import HttpFunctionChannel
from remotemongo.info import CollectionIdentity
from remotemongo.options import (
    FindOneAndModifyOptions,
    FindOptions,
    HttpChannelOptions,
)
from remotemongo.outcome import Outcome
from remotemongo.results import InsertManyResult, UpdateResult

__version__ = "0.1.0"

__all__ = [
    "AppError",
    "CallbackFunctionChannel",
    "CollectionIdentity",
    "CompletionAlreadyFiredError",
    "CompletionToken",
    "ErrorKind",
    "FindOneAndModifyOptions",
    "FindOptions",
    "FunctionCallError",
    "FunctionCallHttpError",
    "FunctionCallNetworkError",
    "FunctionCallTimeoutError",
    "FunctionChannel",
    "FunctionName",
    "FunctionResponse",
    "HttpChannelOptions",
    "HttpFunctionChannel",
    "InsertManyResult",
    "MalformedJSONError",
    "Outcome",
    "RemoteCollection",
    "UpdateResult",
    "__version__",
]
