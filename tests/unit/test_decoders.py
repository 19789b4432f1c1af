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

import pytest

from remotemongo.decoders import (
    decode_count,
    decode_delete_count,
    decode_insert_many_result,
    decode_passthrough,
    decode_update_result,
    decode_void,
)
from remotemongo.exceptions import FunctionCallNetworkError, MalformedJSONError
from remotemongo.results import InsertManyResult, UpdateResult

ALL_DECODERS = [
    (decode_passthrough, ""),
    (decode_count, 0),
    (decode_delete_count, 0),
    (decode_update_result, UpdateResult()),
    (decode_insert_many_result, InsertManyResult()),
    (decode_void, None),
]


class TestDecoders:
    @pytest.mark.describe("test of channel errors winning over any payload")
    def test_error_priority(self) -> None:
        transport_error = FunctionCallNetworkError("connection reset")
        for decoder, zero in ALL_DECODERS:
            for payload in [None, '{"$numberLong": "3"}', "garbage"]:
                outcome = decoder(transport_error, payload)
                assert outcome.error is transport_error
                assert outcome.value == zero

    @pytest.mark.describe("test of success without payload yielding zero values")
    def test_absent_payload(self) -> None:
        for decoder, zero in ALL_DECODERS:
            outcome = decoder(None, None)
            assert outcome.error is None
            assert outcome.value == zero

    @pytest.mark.describe("test of passthrough decoding")
    def test_passthrough(self) -> None:
        assert decode_passthrough(None, '[{"a":1}]').value == '[{"a":1}]'
        # the text is not validated
        assert decode_passthrough(None, "not json").value == "not json"
        assert decode_passthrough(None, "not json").error is None

    @pytest.mark.describe("test of count decoding")
    def test_count(self) -> None:
        assert decode_count(None, '{"$numberLong": "42"}').value == 42
        assert decode_count(None, '{"$numberLong": "0"}').value == 0
        big = decode_count(None, '{"$numberLong": "9007199254740993"}')
        assert big.value == 9007199254740993
        for bad_payload in [
            '{"$numberLong": "abc"}',
            '{"$numberLong": "-3"}',
            '{"$numberLong": 42}',
            '{"$numberInt": "42"}',
            "[]",
            "{",
        ]:
            outcome = decode_count(None, bad_payload)
            assert outcome.value == 0
            assert isinstance(outcome.error, MalformedJSONError)
            assert outcome.error.message != ""

    @pytest.mark.describe("test of decoding excessively nested responses")
    def test_deep_nesting(self) -> None:
        for decoder, zero in ALL_DECODERS:
            if decoder in (decode_passthrough, decode_void):
                continue
            outcome = decoder(None, "[" * 100000)
            assert outcome.value == zero
            assert isinstance(outcome.error, MalformedJSONError)

    @pytest.mark.describe("test of delete count decoding")
    def test_delete_count(self) -> None:
        outcome = decode_delete_count(None, '{"deletedCount": {"$numberInt": "7"}}')
        assert outcome.value == 7
        assert outcome.error is None
        missing = decode_delete_count(None, "{}")
        assert missing.value == 0
        assert isinstance(missing.error, MalformedJSONError)
        assert "deletedCount" in missing.error.message
        wrong_shape = decode_delete_count(None, '{"deletedCount": 7}')
        assert isinstance(wrong_shape.error, MalformedJSONError)

    @pytest.mark.describe("test of update result decoding")
    def test_update_result(self) -> None:
        plain = decode_update_result(
            None,
            '{"matchedCount": {"$numberInt": "2"}, "modifiedCount": {"$numberInt": "1"}}',
        )
        assert plain.error is None
        assert plain.value == UpdateResult(matched_count=2, modified_count=1)
        assert plain.value.upserted_id == ""
        assert not plain.value.upserted

        upserted = decode_update_result(
            None,
            '{"matchedCount": {"$numberInt": "0"}, '
            '"modifiedCount": {"$numberInt": "0"}, '
            '"upsertedId": {"$oid": "5f1a2b3c4d5e6f7a8b9c0d1e"}}',
        )
        assert upserted.value == UpdateResult(0, 0, "5f1a2b3c4d5e6f7a8b9c0d1e")
        assert upserted.value.upserted

        for bad_payload in [
            '{"modifiedCount": {"$numberInt": "1"}}',
            '{"matchedCount": {"$numberInt": "1"}}',
            '{"matchedCount": {"$numberInt": "1"}, '
            '"modifiedCount": {"$numberInt": "1"}, "upsertedId": "5f1a"}',
        ]:
            outcome = decode_update_result(None, bad_payload)
            assert outcome.value == UpdateResult()
            assert isinstance(outcome.error, MalformedJSONError)

    @pytest.mark.describe("test of insert-many result decoding")
    def test_insert_many_result(self) -> None:
        outcome = decode_insert_many_result(
            None, '{"insertedIds": [{"$oid": "aa"}, {"$oid": "bb"}]}'
        )
        assert outcome.error is None
        assert dict(outcome.value) == {0: "aa", 1: "bb"}
        assert outcome.value.inserted_ids == ["aa", "bb"]

        # positions do not depend on the id values
        dupes = decode_insert_many_result(
            None, '{"insertedIds": [{"$oid": "zz"}, {"$oid": "zz"}, {"$oid": "aa"}]}'
        )
        assert dict(dupes.value) == {0: "zz", 1: "zz", 2: "aa"}

        empty = decode_insert_many_result(None, '{"insertedIds": []}')
        assert empty.error is None
        assert len(empty.value) == 0

        for bad_payload in [
            "{}",
            '{"insertedIds": {"$oid": "aa"}}',
            '{"insertedIds": [{"$oid": "aa"}, {"id": "bb"}]}',
            '{"insertedIds": [{"$oid": 12}]}',
        ]:
            failed = decode_insert_many_result(None, bad_payload)
            assert len(failed.value) == 0
            assert isinstance(failed.error, MalformedJSONError)

    @pytest.mark.describe("test of void decoding discarding the payload")
    def test_void(self) -> None:
        assert decode_void(None, '{"a": 1}').value is None
        assert decode_void(None, '{"a": 1}').error is None
        assert decode_void(None, "garbage").error is None

    @pytest.mark.describe("test of decoding being repeatable")
    def test_repeatable(self) -> None:
        payload = (
            '{"matchedCount": {"$numberInt": "3"}, '
            '"modifiedCount": {"$numberInt": "3"}}'
        )
        assert decode_update_result(None, payload) == decode_update_result(
            None, payload
        )
        ids_payload = '{"insertedIds": [{"$oid": "aa"}]}'
        first = decode_insert_many_result(None, ids_payload)
        second = decode_insert_many_result(None, ids_payload)
        assert first.value == second.value
        assert decode_count(None, "{").error is not None
