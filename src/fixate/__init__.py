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

"""Pin clocks, random sources and other global functions for deterministic tests."""

from __future__ import annotations

from fixate._config import PinSet, StrategySpec
from fixate._dispatch import Dispatcher
from fixate._exceptions import FixateError, HookUnavailable, InvalidStrategy, UnknownSymbol
from fixate._handle import OriginalHandle
from fixate._hook import InterceptionHook, PatchHook
from fixate._registry import Registry
from fixate._strategies import (
    Callback,
    ClockDefaulting,
    FixedValue,
    IncrementingCounter,
    Queue,
    Transforming,
)
from fixate._types import DelegatingStrategy, Strategy, SupportsMock

__version__ = "0.1.0"

__all__ = [
    "Callback",
    "ClockDefaulting",
    "DelegatingStrategy",
    "Dispatcher",
    "FixateError",
    "FixedValue",
    "HookUnavailable",
    "IncrementingCounter",
    "InterceptionHook",
    "InvalidStrategy",
    "OriginalHandle",
    "PatchHook",
    "PinSet",
    "Queue",
    "Registry",
    "Strategy",
    "StrategySpec",
    "SupportsMock",
    "Transforming",
    "UnknownSymbol",
    "__version__",
]
