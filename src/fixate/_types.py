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

import abc
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fixate._handle import OriginalHandle

Args = tuple[Any, ...]
Target = Callable[..., Any]


@runtime_checkable
class SupportsMock(Protocol):
    """Anything that can stand in for a redirected symbol."""

    def mock(self, args: Args) -> Any: ...


class Strategy(abc.ABC):
    """Explicit base for override strategies.

    Subclasses implement ``mock(args)``. The registry calls ``attach()`` with
    the freshly minted original handle when the strategy is installed; the
    default does nothing.
    """

    @abc.abstractmethod
    def mock(self, args: Args) -> Any:
        """Produce the value a call to the redirected symbol returns."""

    def attach(self, handle: OriginalHandle) -> None:  # noqa: B027
        """Receive the original handle for the symbol being overridden."""


class DelegatingStrategy(Strategy):
    """Strategy that wraps the original implementation instead of replacing it."""

    def __init__(self) -> None:
        self._original: OriginalHandle | None = None

    def attach(self, handle: OriginalHandle) -> None:
        """Bind to ``handle``. An instance delegates for one symbol only.

        Raises:
            ValueError: If already bound to a different symbol.
        """
        if self._original is not None and self._original.name != handle.name:
            raise ValueError(
                f"{type(self).__name__} already delegates to {self._original.name!r}; "
                f"use a separate instance for {handle.name!r}"
            )
        self._original = handle

    @property
    def original(self) -> OriginalHandle:
        """Handle to the true original. Only available once installed."""
        if self._original is None:
            raise RuntimeError(
                f"{type(self).__name__} has no original handle; "
                f"install it with Registry.override() first"
            )
        return self._original


def is_strategy(obj: object) -> bool:
    """True if ``obj`` exposes a callable ``mock``."""
    return isinstance(obj, SupportsMock) and callable(obj.mock)
