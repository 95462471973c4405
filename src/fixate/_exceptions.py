# Copyright (c) 2026 Pointmatic
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations


class FixateError(Exception):
    """Base exception for all fixate errors."""


class InvalidStrategy(FixateError, TypeError):  # noqa: N818
    """Raised when override() is given an object without a callable ``mock``."""

    def __init__(self, strategy: object) -> None:
        self.strategy = strategy
        super().__init__(
            f"Override strategy must expose a callable mock(args), "
            f"got {type(strategy).__name__}."
        )


class HookUnavailable(FixateError):  # noqa: N818
    """Raised when the interception hook cannot redirect a symbol."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot intercept {name!r}: {reason}")


class UnknownSymbol(FixateError, LookupError):  # noqa: N818
    """Raised when dispatch() is asked to route a symbol that was never engaged."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Symbol {name!r} is not intercepted by this registry.")
