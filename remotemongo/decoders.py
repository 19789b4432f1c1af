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
Decoding of remote function responses into typed results.

All decoders share the same signature, `(error, value) -> Outcome`, and the
same priority rule: an error reported by the channel is handed back as it is,
alongside the zero value of the result type, even when a payload is present
as well. Only a successful response carrying a payload is parsed, and any
failure in doing so becomes a MalformedJSONError.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

from remotemongo.arguments import parse_json_text
from remotemongo.exceptions import AppError, MalformedJSONError
from remotemongo.outcome import Outcome
from remotemongo.results import InsertManyResult, UpdateResult
from remotemongo.utils.extended_json import (
    read_number_int,
    read_number_long,
    read_object_id,
    read_path,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Decoder = Callable[[Optional[AppError], Optional[str]], Outcome[T]]


def _decode_with(
    error: AppError | None,
    value: str | None,
    zero: T,
    extractor: Callable[[Any], Outcome[T]],
) -> Outcome[T]:
    if error is not None:
        return Outcome(zero, error)
    if value is None:
        return Outcome(zero)
    parsed = parse_json_text(value)
    if parsed.error is not None:
        logger.warning(f"Unparseable function response: {parsed.error.message}")
        return Outcome(zero, parsed.error)
    extracted = extractor(parsed.value)
    if extracted.error is not None:
        logger.warning(f"Unexpected function response: {extracted.error.message}")
        return Outcome(zero, extracted.error)
    return extracted


def decode_passthrough(error: AppError | None, value: str | None) -> Outcome[str]:
    """
    Hand back the response text unchanged. Used for the operations returning
    documents (find, findOne, aggregate, insertOne, findOneAndUpdate and
    findOneAndReplace).
    """
    if error is not None:
        return Outcome("", error)
    return Outcome(value if value is not None else "")


def decode_count(error: AppError | None, value: str | None) -> Outcome[int]:
    """Decode a count response, i.e. `{"$numberLong": "<digits>"}`."""
    return _decode_with(error, value, 0, read_number_long)


def decode_delete_count(error: AppError | None, value: str | None) -> Outcome[int]:
    """Decode `{"deletedCount": {"$numberInt": "<digits>"}}`."""
    return _decode_with(
        error,
        value,
        0,
        lambda document: read_number_int(document, "deletedCount"),
    )


def _extract_update_result(document: Any) -> Outcome[UpdateResult]:
    matched = read_number_int(document, "matchedCount")
    if matched.error is not None:
        return Outcome(UpdateResult(), matched.error)
    modified = read_number_int(document, "modifiedCount")
    if modified.error is not None:
        return Outcome(UpdateResult(), modified.error)
    upserted_id = ""
    # a missing upsertedId just means no upsert took place
    if "upsertedId" in document:
        upserted = read_object_id(document, "upsertedId")
        if upserted.error is not None:
            return Outcome(UpdateResult(), upserted.error)
        upserted_id = upserted.value
    return Outcome(
        UpdateResult(
            matched_count=matched.value,
            modified_count=modified.value,
            upserted_id=upserted_id,
        )
    )


def decode_update_result(
    error: AppError | None,
    value: str | None,
) -> Outcome[UpdateResult]:
    """
    Decode the matchedCount, modifiedCount and (optional) upsertedId
    of an updateOne/updateMany response.
    """
    return _decode_with(error, value, UpdateResult(), _extract_update_result)


def _extract_inserted_ids(document: Any) -> Outcome[InsertManyResult]:
    raw_ids = read_path(document, "insertedIds")
    if raw_ids.error is not None:
        return Outcome(InsertManyResult(), raw_ids.error)
    if not isinstance(raw_ids.value, list):
        return Outcome(
            InsertManyResult(),
            MalformedJSONError(
                f"Expected an array at 'insertedIds', "
                f"found {type(raw_ids.value).__name__}"
            ),
        )
    inserted_ids: list[str] = []
    for raw_id in raw_ids.value:
        oid = read_object_id(raw_id)
        if oid.error is not None:
            return Outcome(InsertManyResult(), oid.error)
        inserted_ids.append(oid.value)
    return Outcome(InsertManyResult(inserted_ids))


def decode_insert_many_result(
    error: AppError | None,
    value: str | None,
) -> Outcome[InsertManyResult]:
    """
    Decode `{"insertedIds": [{"$oid": ...}, ...]}` into a mapping from
    the position of each inserted document to its ID.
    """
    return _decode_with(error, value, InsertManyResult(), _extract_inserted_ids)


def decode_void(error: AppError | None, value: str | None) -> Outcome[None]:
    """Discard the payload: only the success or failure is relevant."""
    return Outcome(None, error)
