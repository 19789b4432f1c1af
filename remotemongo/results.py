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
from typing import Iterable, Iterator, Mapping


@dataclass(frozen=True)
class UpdateResult:
    """
    Class that represents the result of update_one and update_many.

    Attributes:
        matched_count: number of documents matching the filter.
        modified_count: number of documents actually modified.
        upserted_id: the ID of the upserted document, or an empty string
            if no upsert took place.
    """

    matched_count: int = 0
    modified_count: int = 0
    upserted_id: str = ""

    @property
    def upserted(self) -> bool:
        return self.upserted_id != ""


class InsertManyResult(Mapping[int, str]):
    """
    Class that represents the result of insert_many: a read-only mapping
    from the (zero-based) position of each input document to the ID the
    server generated for it.

    Example:
        >>> result = InsertManyResult(["5f1a...", "5f1b..."])
        >>> result[1]
        '5f1b...'
        >>> dict(result)
        {0: '5f1a...', 1: '5f1b...'}
    """

    __slots__ = ("_ids",)

    def __init__(self, inserted_ids: Iterable[str] = ()) -> None:
        self._ids: dict[int, str] = {
            index: inserted_id for index, inserted_id in enumerate(inserted_ids)
        }

    @property
    def inserted_ids(self) -> list[str]:
        return list(self._ids.values())

    def __getitem__(self, index: int) -> str:
        return self._ids[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        _ins_ids_str: str
        if len(self._ids) > 5:
            _ins_ids_str = (
                f"[{', '.join(self.inserted_ids[:5])} "
                f"... ({len(self._ids)} total)]"
            )
        else:
            _ins_ids_str = str(self.inserted_ids)
        return f"{self.__class__.__name__}(inserted_ids={_ins_ids_str})"
