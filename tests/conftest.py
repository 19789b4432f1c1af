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
Main conftest for shared fixtures.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from remotemongo import FunctionChannel, FunctionResponse, RemoteCollection
from remotemongo.exceptions import AppError

TEST_DATABASE_NAME = "test_db"
TEST_COLLECTION_NAME = "test_coll"


class RecordingChannel(FunctionChannel):
    """
    A channel answering every call with a preset response,
    while keeping track of the calls it received.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.response = FunctionResponse()

    def respond(self, value: str | None = None, error: AppError | None = None) -> None:
        self.response = FunctionResponse(error=error, value=value)

    async def call_function(self, name: str, arguments_json: str) -> FunctionResponse:
        self.calls.append((name, arguments_json))
        return self.response

    @property
    def last_name(self) -> str:
        return self.calls[-1][0]

    @property
    def last_arguments(self) -> dict[str, Any]:
        return json.loads(self.calls[-1][1])  # type: ignore[no-any-return]


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def collection(channel: RecordingChannel) -> RemoteCollection:
    return RemoteCollection(
        channel,
        database_name=TEST_DATABASE_NAME,
        name=TEST_COLLECTION_NAME,
    )
