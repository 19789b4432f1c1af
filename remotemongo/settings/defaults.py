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

# Defaults/settings for the HTTP function-call channel
DEFAULT_SERVICE_NAME = "mongodb-atlas"
FUNCTION_CALL_PATH_TEMPLATE = "/api/client/v2.0/app/{app_id}/functions/call"
DEFAULT_REQUEST_TIMEOUT_MS = 10000
DEFAULT_AUTH_HEADER = "Authorization"
DEFAULT_AUTH_PREFIX = "Bearer "

# Extended-JSON wrapper keys found in function responses
EJSON_NUMBER_INT = "$numberInt"
EJSON_NUMBER_LONG = "$numberLong"
EJSON_OBJECT_ID = "$oid"

# Settings for redacting secrets in string representations and logging
FIXED_SECRET_PLACEHOLDER = "***"
DEFAULT_REDACTED_HEADER_NAMES = {
    DEFAULT_AUTH_HEADER,
}
