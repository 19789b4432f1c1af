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

import logging
from typing import Any, Sequence, TypeVar

from remotemongo.arguments import (
    build_aggregate_arguments,
    build_count_arguments,
    build_delete_arguments,
    build_find_arguments,
    build_find_one_and_delete_arguments,
    build_find_one_and_replace_arguments,
    build_find_one_and_update_arguments,
    build_insert_many_arguments,
    build_insert_one_arguments,
    build_update_arguments,
    encode_arguments,
)
from remotemongo.channel import FunctionChannel
from remotemongo.constants import (
    ArgumentsDocument,
    FunctionName,
    JSONText,
    PipelineType,
)
from remotemongo.decoders import (
    Decoder,
    decode_count,
    decode_delete_count,
    decode_insert_many_result,
    decode_passthrough,
    decode_update_result,
    decode_void,
)
from remotemongo.info import CollectionIdentity
from remotemongo.options import (
    FindOneAndModifyOptions,
    FindOptions,
    validate_limit,
)
from remotemongo.outcome import Outcome
from remotemongo.results import InsertManyResult, UpdateResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteCollection:
    """
    A remote collection, whose every operation is carried out by calling
    a same-named function through a FunctionChannel.

    Filters, updates, documents, projections, sorts and pipeline stages are
    passed as JSON text (extended JSON as needed), forwarded without being
    interpreted. Document-returning methods give back the response JSON text.

    Each method is a coroutine issuing exactly one function call, and either
    returns the decoded result or raises an AppError:
      - a MalformedJSONError, if some input text is not valid JSON (in which
        case no call is made at all) or the response cannot be decoded;
      - the error reported by the channel, as it is.
    Concurrent calls are not ordered with respect to each other: await the
    completion of an operation before issuing one that depends on it.

    Args:
        channel: the FunctionChannel to issue the calls through.
        database_name: the name of the database.
        name: the name of the collection.

    Example:
        >>> my_coll = RemoteCollection(channel, database_name="shop", name="items")
        >>> await my_coll.insert_one('{"sku": "A-1", "qty": 10}')
        '{"insertedId":{"$oid":"5f2b..."}}'
        >>> await my_coll.count('{"qty": {"$gt": 5}}')
        1
        >>> await my_coll.update_one('{"sku": "A-1"}', '{"$inc": {"qty": -1}}')
        UpdateResult(matched_count=1, modified_count=1, upserted_id='')
    """

    def __init__(
        self,
        channel: FunctionChannel,
        *,
        database_name: str,
        name: str,
    ) -> None:
        self.channel = channel
        self.identity = CollectionIdentity(name=name, database_name=database_name)

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(name="{self.name}", '
            f'database_name="{self.database_name}", channel={self.channel!r})'
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, RemoteCollection):
            return all(
                [
                    self.identity == other.identity,
                    self.channel == other.channel,
                ]
            )
        else:
            return False

    @property
    def name(self) -> str:
        """The name of this collection."""
        return self.identity.name

    @property
    def database_name(self) -> str:
        """The name of the database this collection belongs to."""
        return self.identity.database_name

    @property
    def full_name(self) -> str:
        """The fully-qualified name, in the form "database.collection"."""
        return self.identity.full_name

    async def _call(
        self,
        function_name: FunctionName,
        arguments: Outcome[ArgumentsDocument],
        decoder: Decoder[T],
    ) -> T:
        _name = FunctionName.coerce(function_name).value
        if arguments.error is not None:
            logger.warning(
                f"Not calling {_name} on '{self.full_name}': "
                f"{arguments.error.message}"
            )
            raise arguments.error
        logger.info(f"{_name} on '{self.full_name}'")
        response = await self.channel.call_function(
            _name, encode_arguments(arguments.value)
        )
        decoded = decoder(response.error, response.value)
        if decoded.error is not None:
            logger.warning(f"{_name} on '{self.full_name}' failed: {decoded.error}")
        else:
            logger.info(f"finished {_name} on '{self.full_name}'")
        return decoded.unwrap()

    async def find(
        self,
        filter_json: JSONText,
        options: FindOptions | None = None,
    ) -> str:
        """
        Find the documents matching a filter.

        Args:
            filter_json: the filter as JSON text, e.g. '{"status": "active"}'.
            options: a FindOptions with limit, projection and sort, if needed.

        Returns:
            the JSON text of the array of matching documents.
        """
        return await self._call(
            FunctionName.FIND,
            build_find_arguments(self.identity, filter_json, options),
            decode_passthrough,
        )

    async def find_one(
        self,
        filter_json: JSONText,
        options: FindOptions | None = None,
    ) -> str:
        """
        Find a single document matching a filter.

        Args:
            filter_json: the filter as JSON text.
            options: a FindOptions with limit, projection and sort, if needed.

        Returns:
            the JSON text of the matching document (possibly "null").
        """
        return await self._call(
            FunctionName.FIND_ONE,
            build_find_arguments(self.identity, filter_json, options),
            decode_passthrough,
        )

    async def aggregate(self, pipeline: PipelineType) -> str:
        """
        Run an aggregation pipeline.

        Args:
            pipeline: the stages, each one as JSON text,
                e.g. ['{"$match": {"qty": {"$gt": 0}}}', '{"$count": "n"}'].

        Returns:
            the JSON text of the array of resulting documents.
        """
        return await self._call(
            FunctionName.AGGREGATE,
            build_aggregate_arguments(self.identity, pipeline),
            decode_passthrough,
        )

    async def count(self, filter_json: JSONText, limit: int | None = None) -> int:
        """
        Count the documents matching a filter.

        Args:
            filter_json: the filter as JSON text.
            limit: if provided, the maximum number of documents to count.

        Returns:
            the number of matching documents.
        """
        validate_limit(limit)
        return await self._call(
            FunctionName.COUNT,
            build_count_arguments(self.identity, filter_json, limit),
            decode_count,
        )

    async def insert_one(self, document_json: JSONText) -> str:
        """
        Insert a document.

        Returns:
            the JSON text of the response, which carries the inserted ID.
        """
        return await self._call(
            FunctionName.INSERT_ONE,
            build_insert_one_arguments(self.identity, document_json),
            decode_passthrough,
        )

    async def insert_many(self, documents: Sequence[JSONText]) -> InsertManyResult:
        """
        Insert several documents.

        Args:
            documents: the documents, each one as JSON text.

        Returns:
            an InsertManyResult mapping the index of each input document
            to the ID assigned to it.
        """
        return await self._call(
            FunctionName.INSERT_MANY,
            build_insert_many_arguments(self.identity, documents),
            decode_insert_many_result,
        )

    async def delete_one(self, filter_json: JSONText) -> int:
        """Delete a document matching the filter, returning the number deleted."""
        return await self._call(
            FunctionName.DELETE_ONE,
            build_delete_arguments(self.identity, filter_json),
            decode_delete_count,
        )

    async def delete_many(self, filter_json: JSONText) -> int:
        """Delete all documents matching the filter, returning the number deleted."""
        return await self._call(
            FunctionName.DELETE_MANY,
            build_delete_arguments(self.identity, filter_json),
            decode_delete_count,
        )

    async def update_one(
        self,
        filter_json: JSONText,
        update_json: JSONText,
        upsert: bool = False,
    ) -> UpdateResult:
        """
        Update a document matching the filter.

        Args:
            filter_json: the filter as JSON text.
            update_json: the update as JSON text, e.g. '{"$set": {"a": 1}}'.
            upsert: whether to insert a new document if nothing matches.

        Returns:
            an UpdateResult with the matched and modified counts.
        """
        return await self._call(
            FunctionName.UPDATE_ONE,
            build_update_arguments(self.identity, filter_json, update_json, upsert),
            decode_update_result,
        )

    async def update_many(
        self,
        filter_json: JSONText,
        update_json: JSONText,
        upsert: bool = False,
    ) -> UpdateResult:
        """
        Update all documents matching the filter.

        Args:
            filter_json: the filter as JSON text.
            update_json: the update as JSON text.
            upsert: whether to insert a new document if nothing matches.

        Returns:
            an UpdateResult with the matched and modified counts.
        """
        return await self._call(
            FunctionName.UPDATE_MANY,
            build_update_arguments(self.identity, filter_json, update_json, upsert),
            decode_update_result,
        )

    async def find_one_and_update(
        self,
        filter_json: JSONText,
        update_json: JSONText,
        options: FindOneAndModifyOptions | None = None,
    ) -> str:
        """
        Find a document and update it.

        Args:
            filter_json: the filter as JSON text.
            update_json: the update as JSON text.
            options: a FindOneAndModifyOptions, if needed.

        Returns:
            the JSON text of the document, before or after the update
            according to `options.return_new_document`.
        """
        return await self._call(
            FunctionName.FIND_ONE_AND_UPDATE,
            build_find_one_and_update_arguments(
                self.identity, filter_json, update_json, options
            ),
            decode_passthrough,
        )

    async def find_one_and_replace(
        self,
        filter_json: JSONText,
        replacement_json: JSONText,
        options: FindOneAndModifyOptions | None = None,
    ) -> str:
        """
        Find a document and replace it entirely.

        Args:
            filter_json: the filter as JSON text.
            replacement_json: the new document as JSON text.
            options: a FindOneAndModifyOptions, if needed.

        Returns:
            the JSON text of the document, before or after the replacement
            according to `options.return_new_document`.
        """
        return await self._call(
            FunctionName.FIND_ONE_AND_REPLACE,
            build_find_one_and_replace_arguments(
                self.identity, filter_json, replacement_json, options
            ),
            decode_passthrough,
        )

    async def find_one_and_delete(
        self,
        filter_json: JSONText,
        options: FindOneAndModifyOptions | None = None,
    ) -> None:
        """
        Find a document and delete it. The response payload is discarded.

        Args:
            filter_json: the filter as JSON text.
            options: a FindOneAndModifyOptions, if needed.
        """
        await self._call(
            FunctionName.FIND_ONE_AND_DELETE,
            build_find_one_and_delete_arguments(self.identity, filter_json, options),
            decode_void,
        )
