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


@pytest.mark.describe("test of importing the public names")
def test_public_imports() -> None:
    import remotemongo
    from remotemongo import (  # noqa: F401
        AppError,
        CallbackFunctionChannel,
        FunctionChannel,
        HttpFunctionChannel,
        RemoteCollection,
    )

    for name in remotemongo.__all__:
        assert hasattr(remotemongo, name)
    assert isinstance(remotemongo.__version__, str)


@pytest.mark.describe("test of function names and their coercion")
def test_function_names() -> None:
    from remotemongo.constants import FunctionName

    assert [member.value for member in FunctionName] == [
        "find",
        "findOne",
        "aggregate",
        "count",
        "insertOne",
        "insertMany",
        "deleteOne",
        "deleteMany",
        "updateOne",
        "updateMany",
        "findOneAndUpdate",
        "findOneAndReplace",
        "findOneAndDelete",
    ]
    assert FunctionName.coerce("findOne") == FunctionName.FIND_ONE
    assert FunctionName.coerce("FIND_ONE") == FunctionName.FIND_ONE
    assert FunctionName.coerce("find_one_and_delete") == FunctionName.FIND_ONE_AND_DELETE
    assert "insertMany" in FunctionName
    with pytest.raises(ValueError):
        FunctionName.coerce("drop")
