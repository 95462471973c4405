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

import functools
from typing import TYPE_CHECKING, Any

from fixate._marshal import ArgumentMarshaler

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fixate._registry import Registry
    from fixate._types import Target


class Dispatcher:
    """Single entry point for every call to an intercepted symbol.

    Holds no routing state of its own: each call is handed to the registry,
    which picks the active strategy or the true original.
    """

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def dispatch(self, name: str, args: Sequence[Any]) -> Any:
        """Route one call. No argument validation happens here."""
        return self._registry.dispatch(name, args)

    def trampoline(self, name: str, original: Target) -> Target:
        """Build the callable the interception hook installs in place of ``name``."""
        marshaler = ArgumentMarshaler(name, original)
        dispatch = self.dispatch

        @functools.wraps(original)
        def redirected(*args: Any, **kwargs: Any) -> Any:
            return dispatch(name, marshaler.marshal(args, kwargs))

        return redirected
