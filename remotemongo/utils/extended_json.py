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
Readers for the extended-JSON values found in function responses.

Each reader walks a parsed document along a path of object keys and unwraps
the wrapper at its end (`$numberInt`, `$numberLong`, `$oid`). A missing key or
a value of the wrong shape is reported as a MalformedJSONError in the returned
Outcome, next to the zero value of the reader.
"""

from __future__ import annotations

import re
from typing import Any

from remotemongo.exceptions import MalformedJSONError
from remotemongo.outcome import Outcome
from remotemongo.settings.defaults import (
    EJSON_NUMBER_INT,
    EJSON_NUMBER_LONG,
    EJSON_OBJECT_ID,
)

UNSIGNED_INTEGER_PATTERN = re.compile(r"[0-9]+")


def read_path(document: Any, *path: str) -> Outcome[Any]:
    """
    Walk a parsed JSON value along a sequence of object keys.

    Returns:
        an Outcome with the value found at the end of the path, or
        a MalformedJSONError naming the first key that could not be read.
    """
    current = document
    for depth, key in enumerate(path):
        if not isinstance(current, dict):
            location = ".".join(path[:depth]) or "(top level)"
            return Outcome(
                None,
                MalformedJSONError(
                    f"Expected an object at '{location}', "
                    f"found {type(current).__name__}"
                ),
            )
        if key not in current:
            return Outcome(
                None,
                MalformedJSONError(f"Missing key '{'.'.join(path[: depth + 1])}'"),
            )
        current = current[key]
    return Outcome(current)


def _read_wrapped_integer(document: Any, path: tuple[str, ...], wrapper: str) -> Outcome[int]:
    raw = read_path(document, *path, wrapper)
    if raw.error is not None:
        return Outcome(0, raw.error)
    if not isinstance(raw.value, str) or not UNSIGNED_INTEGER_PATTERN.fullmatch(
        raw.value
    ):
        location = ".".join(path + (wrapper,))
        return Outcome(
            0,
            MalformedJSONError(f"Value at '{location}' is not an integer: {raw.value!r}"),
        )
    return Outcome(int(raw.value))


def read_number_int(document: Any, *path: str) -> Outcome[int]:
    """Read a {"$numberInt": "<digits>"} wrapper found at `path`."""
    return _read_wrapped_integer(document, path, EJSON_NUMBER_INT)


def read_number_long(document: Any, *path: str) -> Outcome[int]:
    """Read a {"$numberLong": "<digits>"} wrapper found at `path`."""
    return _read_wrapped_integer(document, path, EJSON_NUMBER_LONG)


def read_object_id(document: Any, *path: str) -> Outcome[str]:
    """Read the hex string of a {"$oid": "<hex>"} wrapper found at `path`."""
    raw = read_path(document, *path, EJSON_OBJECT_ID)
    if raw.error is not None:
        return Outcome("", raw.error)
    if not isinstance(raw.value, str):
        location = ".".join(path + (EJSON_OBJECT_ID,))
        return Outcome(
            "",
            MalformedJSONError(f"Value at '{location}' is not a string: {raw.value!r}"),
        )
    return Outcome(raw.value)
