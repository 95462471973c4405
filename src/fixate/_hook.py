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
import functools
import logging
import pkgutil
from typing import TYPE_CHECKING, Any, ClassVar
from unittest import mock

from fixate._exceptions import HookUnavailable

if TYPE_CHECKING:
    from fixate._types import Target

_log = logging.getLogger("fixate")


class InterceptionHook(abc.ABC):
    """Redirects calls to a named global symbol into a replacement callable.

    The registry depends on this interface only; how redirection is
    physically achieved is up to the implementation.
    """

    @abc.abstractmethod
    def resolve(self, name: str) -> Target:
        """Return the implementation ``name`` currently refers to.

        Raises:
            HookUnavailable: If ``name`` cannot be located or is not callable.
        """

    @abc.abstractmethod
    def engage(self, name: str, replacement: Target) -> Target:
        """Redirect ``name`` to ``replacement`` and return the true original.

        Raises:
            HookUnavailable: If the symbol cannot be redirected.
        """

    @abc.abstractmethod
    def disengage(self, name: str) -> None:
        """Undo ``engage()`` for ``name``. No-op if not engaged."""


class _Interception:
    """Process-wide state for one patched symbol.

    Owns the true original and the single patcher. Each engaged hook adds a
    replacement; the most recently engaged one receives calls.
    """

    def __init__(self, name: str, original: Target) -> None:
        self.original = original
        self.replacements: dict[PatchHook, Target] = {}

        @functools.wraps(original)
        def routed(*args: Any, **kwargs: Any) -> Any:
            replacement = next(reversed(self.replacements.values()))
            return replacement(*args, **kwargs)

        self.patcher = mock.patch(name, new=routed)


class PatchHook(InterceptionHook):
    """Interception via ``unittest.mock.patch`` on the symbol's module attribute.

    Only call sites that look the symbol up through its owner at call time
    (``time.time()``) are redirected. Names bound earlier with
    ``from time import time`` keep pointing at the original.

    Patches are shared across instances: every hook engaged on a name sees
    the same true original, and the module attribute is put back only when
    the last of them disengages, in whatever order that happens.
    """

    _interceptions: ClassVar[dict[str, _Interception]] = {}

    def resolve(self, name: str) -> Target:
        interception = self._interceptions.get(name)
        if interception is not None:
            return interception.original
        try:
            target = pkgutil.resolve_name(name)
        except (ImportError, AttributeError, ValueError) as exc:
            raise HookUnavailable(name, str(exc) or type(exc).__name__) from exc
        if not callable(target):
            raise HookUnavailable(name, f"{type(target).__name__} object is not callable")
        return target

    def engage(self, name: str, replacement: Target) -> Target:
        interception = self._interceptions.get(name)
        if interception is None:
            interception = self._start(name)
        elif self in interception.replacements:
            raise HookUnavailable(name, "already engaged")
        interception.replacements[self] = replacement
        _log.debug(
            "Engaged patch hook for %s (%d active)", name, len(interception.replacements)
        )
        return interception.original

    def disengage(self, name: str) -> None:
        interception = self._interceptions.get(name)
        if interception is None or self not in interception.replacements:
            return
        del interception.replacements[self]
        if not interception.replacements:
            interception.patcher.stop()
            del self._interceptions[name]
        _log.debug("Disengaged patch hook for %s", name)

    @property
    def engaged(self) -> tuple[str, ...]:
        """Names currently patched by this hook."""
        return tuple(
            name
            for name, interception in self._interceptions.items()
            if self in interception.replacements
        )

    def _start(self, name: str) -> _Interception:
        original = self.resolve(name)
        try:
            interception = _Interception(name, original)
            interception.patcher.start()
        except (TypeError, AttributeError, ImportError) as exc:
            raise HookUnavailable(name, str(exc) or type(exc).__name__) from exc
        self._interceptions[name] = interception
        return interception
