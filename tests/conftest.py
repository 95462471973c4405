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

import sys
import types
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from fixate import HookUnavailable, InterceptionHook, Registry

SAMPLE_MODULE = "fixate_sample"


class SampleModule(types.ModuleType):
    """Throwaway module whose functions are intercepted in tests."""

    def __init__(self) -> None:
        super().__init__(SAMPLE_MODULE)
        self.ticks = 0

        def add(a: Any, b: Any) -> Any:
            return a + b

        def scale(x: float, factor: float = 1.0, offset: float = 0.0) -> float:
            return x * factor + offset

        def tick() -> int:
            self.ticks += 1
            return self.ticks

        def keyword_only(x: int, *, flag: bool = False) -> tuple[int, bool]:
            return (x, flag)

        def boom() -> None:
            raise RuntimeError("original failed")

        self.add = add
        self.scale = scale
        self.tick = tick
        self.keyword_only = keyword_only
        self.boom = boom
        self.constant = 42


class RecordingHook(InterceptionHook):
    """In-memory hook: keeps replacements in a dict instead of patching modules."""

    def __init__(self, targets: dict[str, Callable[..., Any]] | None = None) -> None:
        self.targets: dict[str, Callable[..., Any]] = dict(targets or {})
        self.installed: dict[str, Callable[..., Any]] = {}
        self.engage_calls: list[str] = []
        self.disengage_calls: list[str] = []
        self.refuse: set[str] = set()

    def resolve(self, name: str) -> Callable[..., Any]:
        if name not in self.targets:
            raise HookUnavailable(name, "no such target")
        return self.targets[name]

    def engage(self, name: str, replacement: Callable[..., Any]) -> Callable[..., Any]:
        self.engage_calls.append(name)
        if name in self.refuse:
            raise HookUnavailable(name, "refused")
        original = self.resolve(name)
        self.installed[name] = replacement
        return original

    def disengage(self, name: str) -> None:
        self.disengage_calls.append(name)
        self.installed.pop(name, None)

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke ``name`` the way an intercepted call site would."""
        fn = self.installed.get(name, self.targets[name])
        return fn(*args, **kwargs)


@pytest.fixture()
def sample_module(monkeypatch: pytest.MonkeyPatch) -> SampleModule:
    """Install a fresh sample module in sys.modules for the test's duration."""
    module = SampleModule()
    monkeypatch.setitem(sys.modules, SAMPLE_MODULE, module)
    return module


@pytest.fixture()
def registry() -> Iterator[Registry]:
    """A registry using the real patch hook, closed on teardown."""
    with Registry() as reg:
        yield reg


@pytest.fixture()
def recording_hook() -> RecordingHook:
    """A fake hook with a few plain targets."""
    return RecordingHook(
        {
            "pkg.add": lambda a, b: a + b,
            "pkg.echo": lambda *args: args,
            "pkg.now": lambda: 123.0,
        }
    )
