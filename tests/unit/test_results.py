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

from remotemongo import InsertManyResult, Outcome, UpdateResult
from remotemongo.exceptions import MalformedJSONError
from remotemongo.utils.extended_json import (
    read_number_int,
    read_object_id,
    read_path,
)


class TestResults:
    @pytest.mark.describe("test of UpdateResult")
    def test_update_result(self) -> None:
        assert UpdateResult() == UpdateResult(0, 0, "")
        assert not UpdateResult().upserted
        assert UpdateResult(upserted_id="aa").upserted

    @pytest.mark.describe("test of InsertManyResult as a mapping")
    def test_insert_many_result(self) -> None:
        result = InsertManyResult(["aa", "bb", "aa"])
        assert len(result) == 3
        assert result[2] == "aa"
        assert list(result) == [0, 1, 2]
        assert result == {0: "aa", 1: "bb", 2: "aa"}
        assert result.inserted_ids == ["aa", "bb", "aa"]
        with pytest.raises(KeyError):
            result[3]
        assert InsertManyResult() == {}

    @pytest.mark.describe("test of InsertManyResult repr")
    def test_insert_many_result_repr(self) -> None:
        assert repr(InsertManyResult(["aa"])) == "InsertManyResult(inserted_ids=['aa'])"
        many = InsertManyResult([f"id{i}" for i in range(8)])
        assert repr(many) == (
            "InsertManyResult(inserted_ids=[id0, id1, id2, id3, id4 ... (8 total)])"
        )

    @pytest.mark.describe("test of Outcome")
    def test_outcome(self) -> None:
        good = Outcome(3)
        assert good.ok
        assert good.unwrap() == 3
        assert repr(good) == "Outcome(value=3)"

        error = MalformedJSONError("bad")
        bad = Outcome(0, error)
        assert not bad.ok
        with pytest.raises(MalformedJSONError) as exc:
            bad.unwrap()
        assert exc.value is error


class TestExtendedJSONReaders:
    @pytest.mark.describe("test of reading along a path")
    def test_read_path(self) -> None:
        document = {"a": {"b": [1, 2]}}
        assert read_path(document, "a", "b").value == [1, 2]
        assert read_path(document).value is document

        missing = read_path(document, "a", "c")
        assert isinstance(missing.error, MalformedJSONError)
        assert missing.error.message == "Missing key 'a.c'"

        not_object = read_path(document, "a", "b", "c")
        assert isinstance(not_object.error, MalformedJSONError)
        assert not_object.error.message.startswith("Expected an object at 'a.b'")

        top_level = read_path([1], "a")
        assert top_level.error is not None
        assert "(top level)" in top_level.error.message

    @pytest.mark.describe("test of reading wrapped values")
    def test_read_wrapped(self) -> None:
        assert read_number_int({"n": {"$numberInt": "12"}}, "n").value == 12
        assert read_number_int({"$numberInt": "007"}).value == 7
        for bad in ["", "1.5", "-1", " 1", "1e3"]:
            outcome = read_number_int({"$numberInt": bad})
            assert outcome.value == 0
            assert isinstance(outcome.error, MalformedJSONError)
        assert read_object_id({"$oid": "abc"}).value == "abc"
        assert read_object_id({"$oid": None}).value == ""
        assert read_object_id({"$oid": None}).error is not None
