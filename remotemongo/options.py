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

from dataclasses import dataclass, field
from typing import Iterable

from remotemongo.constants import JSONText


def validate_limit(limit: int | None) -> None:
    """Raise TypeError or ValueError unless limit is None or a non-negative int."""
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise TypeError(f"limit must be an integer, got {limit!r}")
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")


@dataclass(frozen=True)
class FindOptions:
    """
    Modifiers for the find and find_one operations.

    Attributes:
        limit: the maximum number of documents to return (non-negative).
        projection_json: JSON text of a projection, e.g. '{"name": 1}'.
        sort_json: JSON text of a sort specification, e.g. '{"age": -1}'.
    """

    limit: int | None = None
    projection_json: JSONText | None = None
    sort_json: JSONText | None = None

    def __post_init__(self) -> None:
        validate_limit(self.limit)


@dataclass(frozen=True)
class FindOneAndModifyOptions:
    """
    Modifiers for the find_one_and_update, find_one_and_replace and
    find_one_and_delete operations.

    Fields left to None are omitted from the request altogether, while
    an explicit False is transmitted.

    Attributes:
        upsert: whether to insert a new document if nothing matches.
        return_new_document: whether to return the document as it is after
            the modification (rather than before it).
        projection_json: JSON text of a projection for the returned document.
        sort_json: JSON text of a sort, to choose among several matches.
    """

    upsert: bool | None = None
    return_new_document: bool | None = None
    projection_json: JSONText | None = None
    sort_json: JSONText | None = None


@dataclass(frozen=True)
class HttpChannelOptions:
    """
    Settings for the HTTP function-call channel. Unset (None) fields fall
    back to the values in `remotemongo.settings.defaults`.

    Attributes:
        request_timeout_ms: timeout for each HTTP request, in milliseconds.
            Zero means no timeout.
        service_name: the name of the linked data service the functions
            are called against.
        headers: additional HTTP headers. A None value removes the header.
        redacted_header_names: names of headers whose values are never logged,
            in addition to the authorization header.
    """

    request_timeout_ms: int | None = None
    service_name: str | None = None
    headers: dict[str, str | None] = field(default_factory=dict)
    redacted_header_names: Iterable[str] = ()
