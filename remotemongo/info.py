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
from typing import Any


@dataclass(frozen=True)
class CollectionIdentity:
    """
    The pair identifying a remote collection: it is shared, unchanged,
    by every operation issued through a collection object.

    Attributes:
        name: the collection name.
        database_name: the name of the database the collection belongs to.
    """

    name: str
    database_name: str

    @property
    def full_name(self) -> str:
        return f"{self.database_name}.{self.name}"

    def base_arguments(self) -> dict[str, Any]:
        """
        A fresh argument element with the "database" and "collection" fields,
        to be extended with the operation-specific fields.
        """
        return {
            "database": self.database_name,
            "collection": self.name,
        }
