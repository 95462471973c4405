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

from typing import TYPE_CHECKING, Any

from fixate._types import DelegatingStrategy, Strategy

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from fixate._registry import Registry
    from fixate._types import Args


class FixedValue(Strategy):
    """Always returns the same value."""

    def __init__(self, value: Any) -> None:
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    def mock(self, args: Args) -> Any:
        return self._value

    def __repr__(self) -> str:
        return f"FixedValue({self._value!r})"


class IncrementingCounter(Strategy):
    """Returns ``start``, then ``start + step``, and so on."""

    def __init__(self, start: float = 0, step: float = 1) -> None:
        self._current = start
        self._step = step

    @property
    def current(self) -> float:
        """Value the next call returns."""
        return self._current

    def mock(self, args: Args) -> Any:
        value = self._current
        self._current += self._step
        return value

    def __repr__(self) -> str:
        return f"IncrementingCounter(current={self._current!r}, step={self._step!r})"


class Queue(Strategy):
    """Returns ``values`` in order, then keeps returning the last one."""

    def __init__(self, values: Iterable[Any]) -> None:
        self._values = tuple(values)
        if not self._values:
            raise ValueError("Queue needs at least one value")
        self._cursor = 0

    @property
    def remaining(self) -> int:
        """Values left before the tail starts repeating."""
        return len(self._values) - self._cursor

    def mock(self, args: Args) -> Any:
        if self._cursor >= len(self._values):
            return self._values[-1]
        value = self._values[self._cursor]
        self._cursor += 1
        return value

    def __repr__(self) -> str:
        return f"Queue({list(self._values)!r}, cursor={self._cursor})"


class Callback(Strategy):
    """Adapts a plain function: ``mock(args)`` becomes ``fn(*args)``."""

    def __init__(self, fn: Callable[..., Any]) -> None:
        self._fn = fn

    def mock(self, args: Args) -> Any:
        return self._fn(*args)


class Transforming(DelegatingStrategy):
    """Rewrites the arguments, then calls the true original with them.

    Example::

        registry.override("time.sleep", Transforming(lambda args: (0,)))
    """

    def __init__(self, transform: Callable[[Args], Iterable[Any]]) -> None:
        super().__init__()
        self._transform = transform

    def mock(self, args: Args) -> Any:
        return self.original.invoke(tuple(self._transform(args)))


class ClockDefaulting(DelegatingStrategy):
    """Keeps clock-dependent functions consistent with a pinned clock.

    When the timestamp argument at ``position`` is omitted or ``None``, it is
    replaced with whatever ``clock`` returns through ``registry`` right now
    (optionally passed through ``convert``), and the original is called with
    the completed arguments. Explicit timestamps pass through untouched.

    Example::

        registry.override("time.time", FixedValue(86400.0))
        registry.override("time.gmtime", ClockDefaulting(registry, "time.time"))
        time.gmtime().tm_mday  # 2
    """

    def __init__(
        self,
        registry: Registry,
        clock: str,
        position: int = 0,
        convert: Callable[[Any], Any] | None = None,
    ) -> None:
        super().__init__()
        if position < 0:
            raise ValueError(f"position must be >= 0, got {position}")
        self._registry = registry
        self._clock = clock
        self._position = position
        self._convert = convert

    def mock(self, args: Args) -> Any:
        # Arguments before the timestamp are missing; let the original complain.
        if len(args) < self._position:
            return self.original.invoke(args)
        if len(args) > self._position and args[self._position] is not None:
            return self.original.invoke(args)

        now = self._registry.call(self._clock)
        if self._convert is not None:
            now = self._convert(now)

        completed = list(args)
        if len(completed) == self._position:
            completed.append(now)
        else:
            completed[self._position] = now
        return self.original.invoke(completed)
