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

from typing import Any, Dict, Sequence

from remotemongo.utils.str_enum import StrEnum

# Filters, updates, replacements, projections, sorts and pipeline stages
# travel as JSON text and are only checked for well-formedness.
JSONText = str
PipelineType = Sequence[str]
ArgumentsDocument = Dict[str, Any]


class FunctionName(StrEnum):
    """
    Names of the remote functions backing each collection operation.
    These are the exact strings passed to the invocation channel.
    """

    FIND = "find"
    FIND_ONE = "findOne"
    AGGREGATE = "aggregate"
    COUNT = "count"
    INSERT_ONE = "insertOne"
    INSERT_MANY = "insertMany"
    DELETE_ONE = "deleteOne"
    DELETE_MANY = "deleteMany"
    UPDATE_ONE = "updateOne"
    UPDATE_MANY = "updateMany"
    FIND_ONE_AND_UPDATE = "findOneAndUpdate"
    FIND_ONE_AND_REPLACE = "findOneAndReplace"
    FIND_ONE_AND_DELETE = "findOneAndDelete"


class ErrorKind(StrEnum):
    """
    Categories of AppError. Only MALFORMED_JSON originates in the
    encoding/decoding layer; the others are reported by invocation channels.
    """

    MALFORMED_JSON = "malformed_json"
    HTTP = "http"
    TIMEOUT = "timeout"
    NETWORK = "network"
    FUNCTION = "function"
    COMPLETION = "completion"
