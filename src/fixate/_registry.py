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

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from fixate._dispatch import Dispatcher
from fixate._exceptions import InvalidStrategy, UnknownSymbol
from fixate._handle import OriginalHandle
from fixate._hook import PatchHook
from fixate._types import Strategy, is_strategy

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from types import TracebackType

    from fixate._config import PinSet
    from fixate._hook import InterceptionHook
    from fixate._types import SupportsMock, Target

_log = logging.getLogger("fixate")


class Registry:
    """Table of active overrides, keyed by dotted symbol name.

    At most one strategy is active per symbol. Overriding an overridden
    symbol replaces the strategy outright; there is no stack to pop.

    The registry is not thread-safe. Mutating the same symbol from several
    threads at once is the caller's responsibility.

    Several registries may intercept the same symbol. Each of them gets the
    same true original; calls reach the registry that engaged the symbol
    most recently, and fall back to the previous one when it closes.

    Nothing in the per-call path logs: the logging module reads
    ``time.time`` itself and would re-enter a pinned clock.
    """

    def __init__(self, hook: InterceptionHook | None = None) -> None:
        self._hook: InterceptionHook = hook if hook is not None else PatchHook()
        self._dispatcher = Dispatcher(self)
        self._entries: dict[str, SupportsMock] = {}
        self._originals: dict[str, Target] = {}

    def override(self, name: str, strategy: SupportsMock) -> OriginalHandle:
        """Route every call to ``name`` through ``strategy``.

        Returns:
            A fresh handle to the true original implementation of ``name``.

        Raises:
            InvalidStrategy: If ``strategy`` has no callable ``mock``.
            HookUnavailable: If ``name`` cannot be intercepted. Nothing is recorded.
            ValueError: If a delegating ``strategy`` is already bound to another
                symbol. Nothing is recorded.
        """
        if not is_strategy(strategy):
            raise InvalidStrategy(strategy)

        original = self._engage(name)
        handle = OriginalHandle(name=name, target=original)
        if isinstance(strategy, Strategy):
            strategy.attach(handle)

        replaced = self._entries.get(name)
        self._entries[name] = strategy
        if replaced is not None:
            _log.debug("Override replaced for %s: %r -> %r", name, replaced, strategy)
        else:
            _log.debug("Override installed for %s: %r", name, strategy)
        return handle

    def restore(self, name: str) -> None:
        """Return ``name`` to its original behavior. No-op if not overridden."""
        if self._entries.pop(name, None) is not None:
            _log.debug("Override removed for %s", name)

    def dispatch(self, name: str, args: Sequence[Any]) -> Any:
        """Route one call to the active strategy, or to the true original."""
        strategy = self._entries.get(name)
        if strategy is not None:
            return strategy.mock(tuple(args))
        original = self._originals.get(name)
        if original is None:
            raise UnknownSymbol(name)
        return original(*args)

    def active(self, name: str) -> SupportsMock | None:
        """The strategy currently installed for ``name``, if any."""
        return self._entries.get(name)

    def is_overridden(self, name: str) -> bool:
        return name in self._entries

    @property
    def overridden(self) -> tuple[str, ...]:
        """Names with an active strategy."""
        return tuple(self._entries)

    @property
    def engaged(self) -> tuple[str, ...]:
        """Names whose interception hook is installed."""
        return tuple(self._originals)

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def call(self, name: str, *args: Any) -> Any:
        """Call ``name`` as this registry routes it.

        Symbols this registry never engaged go straight to the true original.
        """
        if name in self._originals:
            return self.dispatch(name, args)
        return self._hook.resolve(name)(*args)

    @contextmanager
    def overriding(self, name: str, strategy: SupportsMock) -> Iterator[OriginalHandle]:
        """Override ``name`` for the duration of a ``with`` block."""
        handle = self.override(name, strategy)
        try:
            yield handle
        finally:
            self.restore(name)

    def apply(self, pins: PinSet) -> dict[str, OriginalHandle]:
        """Install a fresh strategy for every pin in ``pins``."""
        return {name: self.override(name, spec.build()) for name, spec in pins.pins.items()}

    def restore_all(self) -> None:
        """Restore every overridden symbol."""
        for name in list(self._entries):
            self.restore(name)

    def close(self) -> None:
        """Restore everything and remove every interception hook."""
        self.restore_all()
        for name in list(self._originals):
            self._hook.disengage(name)
            del self._originals[name]
        _log.debug("Registry closed")

    def __enter__(self) -> Registry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _engage(self, name: str) -> Target:
        """Install the hook for ``name`` once and return the true original."""
        original = self._originals.get(name)
        if original is not None:
            return original
        # The trampoline needs the original's signature before it is installed.
        resolved = self._hook.resolve(name)
        original = self._hook.engage(name, self._dispatcher.trampoline(name, resolved))
        self._originals[name] = original
        return original
