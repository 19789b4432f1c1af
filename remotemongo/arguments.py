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
Encoding of collection operations into the argument documents of the
corresponding remote functions.

Every document has the shape `{"arguments": [element], ...outer}`, where the
element starts with the "database" and "collection" fields. The placement of
the modifier fields (inside the element or at the outer level) differs among
operations and is reproduced here exactly as the backend functions expect it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from remotemongo.constants import ArgumentsDocument, JSONText, PipelineType
from remotemongo.exceptions import MalformedJSONError
from remotemongo.info import CollectionIdentity
from remotemongo.options import FindOneAndModifyOptions, FindOptions
from remotemongo.outcome import Outcome

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_json_text(json_text: JSONText) -> Outcome[Any]:
    """
    Parse a JSON text into the corresponding Python structure.

    Only standard JSON is accepted (NaN and Infinity are rejected), and
    nesting too deep for the parser counts as malformed.

    Returns:
        an Outcome holding the parsed value, or a MalformedJSONError
        carrying the parser diagnostic (with None as value).
    """
    try:
        return Outcome(json.loads(json_text, parse_constant=_reject_constant))
    except (TypeError, ValueError, RecursionError) as exc:
        logger.debug(f"Could not parse JSON text {json_text!r}: {exc}")
        return Outcome(
            None,
            MalformedJSONError(
                str(exc),
                json_text=json_text if isinstance(json_text, str) else None,
            ),
        )


def parse_json_texts(json_texts: Sequence[JSONText]) -> Outcome[list[Any]]:
    """Parse a sequence of JSON texts, stopping at the first failure."""
    parsed: list[Any] = []
    for json_text in json_texts:
        item = parse_json_text(json_text)
        if item.error is not None:
            return Outcome([], item.error)
        parsed.append(item.value)
    return Outcome(parsed)


def _parse_fields(fields: list[tuple[str, JSONText]]) -> Outcome[dict[str, Any]]:
    parsed: dict[str, Any] = {}
    for key, json_text in fields:
        item = parse_json_text(json_text)
        if item.error is not None:
            return Outcome({}, item.error)
        parsed[key] = item.value
    return Outcome(parsed)


def _shape_fields(
    projection_json: JSONText | None,
    sort_json: JSONText | None,
) -> list[tuple[str, JSONText]]:
    fields: list[tuple[str, JSONText]] = []
    if projection_json is not None:
        fields.append(("project", projection_json))
    if sort_json is not None:
        fields.append(("sort", sort_json))
    return fields


def _modify_flags(options: FindOneAndModifyOptions) -> dict[str, bool]:
    flags: dict[str, bool] = {}
    if options.upsert is not None:
        flags["upsert"] = options.upsert
    if options.return_new_document is not None:
        flags["returnNewDocument"] = options.return_new_document
    return flags


def _envelope(
    element: dict[str, Any],
    outer: dict[str, Any] | None = None,
) -> ArgumentsDocument:
    return {"arguments": [element], **(outer or {})}


def build_find_arguments(
    identity: CollectionIdentity,
    filter_json: JSONText,
    options: FindOptions | None = None,
) -> Outcome[ArgumentsDocument]:
    """
    Arguments for "find" and "findOne": the query goes in the element,
    while limit, projection and sort are outer fields.
    """
    _options = options or FindOptions()
    parsed = _parse_fields(
        [("query", filter_json)]
        + _shape_fields(_options.projection_json, _options.sort_json)
    )
    if parsed.error is not None:
        return Outcome({}, parsed.error)
    element = {**identity.base_arguments(), "query": parsed.value.pop("query")}
    outer: dict[str, Any] = {}
    if _options.limit is not None:
        outer["limit"] = _options.limit
    outer.update(parsed.value)
    return Outcome(_envelope(element, outer))


def build_aggregate_arguments(
    identity: CollectionIdentity,
    pipeline: PipelineType,
) -> Outcome[ArgumentsDocument]:
    stages = parse_json_texts(pipeline)
    if stages.error is not None:
        return Outcome({}, stages.error)
    return Outcome(
        _envelope({**identity.base_arguments(), "pipeline": stages.value})
    )


def build_count_arguments(
    identity: CollectionIdentity,
    filter_json: JSONText,
    limit: int | None = None,
) -> Outcome[ArgumentsDocument]:
    query = parse_json_text(filter_json)
    if query.error is not None:
        return Outcome({}, query.error)
    element = {**identity.base_arguments(), "query": query.value}
    if limit is not None:
        element["limit"] = limit
    return Outcome(_envelope(element))


def build_insert_one_arguments(
    identity: CollectionIdentity,
    document_json: JSONText,
) -> Outcome[ArgumentsDocument]:
    document = parse_json_text(document_json)
    if document.error is not None:
        return Outcome({}, document.error)
    return Outcome(
        _envelope({**identity.base_arguments(), "document": document.value})
    )


def build_insert_many_arguments(
    identity: CollectionIdentity,
    documents: Sequence[JSONText],
) -> Outcome[ArgumentsDocument]:
    parsed = parse_json_texts(documents)
    if parsed.error is not None:
        return Outcome({}, parsed.error)
    return Outcome(
        _envelope({**identity.base_arguments(), "documents": parsed.value})
    )


def build_delete_arguments(
    identity: CollectionIdentity,
    filter_json: JSONText,
) -> Outcome[ArgumentsDocument]:
    """Arguments for "deleteOne" and "deleteMany"."""
    query = parse_json_text(filter_json)
    if query.error is not None:
        return Outcome({}, query.error)
    return Outcome(_envelope({**identity.base_arguments(), "query": query.value}))


def build_update_arguments(
    identity: CollectionIdentity,
    filter_json: JSONText,
    update_json: JSONText,
    upsert: bool = False,
) -> Outcome[ArgumentsDocument]:
    """
    Arguments for "updateOne" and "updateMany": the upsert flag is always
    sent, in the element.
    """
    parsed = _parse_fields([("query", filter_json), ("update", update_json)])
    if parsed.error is not None:
        return Outcome({}, parsed.error)
    return Outcome(
        _envelope({**identity.base_arguments(), **parsed.value, "upsert": upsert})
    )


def build_find_one_and_update_arguments(
    identity: CollectionIdentity,
    filter_json: JSONText,
    update_json: JSONText,
    options: FindOneAndModifyOptions | None = None,
) -> Outcome[ArgumentsDocument]:
    """
    Arguments for "findOneAndUpdate": all modifiers go in the element,
    after the query and the update.
    """
    _options = options or FindOneAndModifyOptions()
    parsed = _parse_fields([("query", filter_json), ("update", update_json)])
    if parsed.error is not None:
        return Outcome({}, parsed.error)
    shape = _parse_fields(_shape_fields(_options.projection_json, _options.sort_json))
    if shape.error is not None:
        return Outcome({}, shape.error)
    element = {
        **identity.base_arguments(),
        **parsed.value,
        **_modify_flags(_options),
        **shape.value,
    }
    return Outcome(_envelope(element))


def build_find_one_and_replace_arguments(
    identity: CollectionIdentity,
    filter_json: JSONText,
    replacement_json: JSONText,
    options: FindOneAndModifyOptions | None = None,
) -> Outcome[ArgumentsDocument]:
    """
    Arguments for "findOneAndReplace": the replacement travels as "update"
    in the element, while the modifiers are outer fields.
    """
    _options = options or FindOneAndModifyOptions()
    parsed = _parse_fields([("query", filter_json), ("update", replacement_json)])
    if parsed.error is not None:
        return Outcome({}, parsed.error)
    shape = _parse_fields(_shape_fields(_options.projection_json, _options.sort_json))
    if shape.error is not None:
        return Outcome({}, shape.error)
    element = {**identity.base_arguments(), **parsed.value}
    return Outcome(_envelope(element, {**_modify_flags(_options), **shape.value}))


def build_find_one_and_delete_arguments(
    identity: CollectionIdentity,
    filter_json: JSONText,
    options: FindOneAndModifyOptions | None = None,
) -> Outcome[ArgumentsDocument]:
    """Arguments for "findOneAndDelete": all modifiers go in the element."""
    _options = options or FindOneAndModifyOptions()
    parsed = _parse_fields(
        [("query", filter_json)]
        + _shape_fields(_options.projection_json, _options.sort_json)
    )
    if parsed.error is not None:
        return Outcome({}, parsed.error)
    query = parsed.value.pop("query")
    element = {
        **identity.base_arguments(),
        "query": query,
        **_modify_flags(_options),
        **parsed.value,
    }
    return Outcome(_envelope(element))


def encode_arguments(arguments: ArgumentsDocument) -> str:
    """Serialize an argument document into compact JSON text."""
    return json.dumps(
        arguments,
        allow_nan=False,
        separators=(",", ":"),
        ensure_ascii=False,
    )
