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

from dataclasses import dataclass
from typing import Generic, TypeVar

from remotemongo.exceptions import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    The product of an encoding or decoding step: either a value, or an error
    accompanied by the operation's zero value (empty string, 0, empty result).

    Parsing and decoding never raise: they hand back an Outcome, and the
    collection methods decide how to surface its error.

    Attributes:
        value: the produced value, or the zero value if an error occurred.
        error: None on success, the AppError otherwise.
    """

    value: T
    error: AppError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the error this outcome carries."""
        if self.error is not None:
            raise self.error
        return self.value

    def __repr__(self) -> str:
        if self.error is None:
            return f"{self.__class__.__name__}(value={self.value!r})"
        return f"{self.__class__.__name__}(value={self.value!r}, error={self.error!r})"
