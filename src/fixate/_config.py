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

import json
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from fixate._strategies import FixedValue, IncrementingCounter, Queue

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fixate._types import Strategy

_KINDS = ("fixed", "counter", "queue")


@dataclass(frozen=True)
class StrategySpec:
    """Declarative description of one bundled strategy."""

    kind: str
    value: Any = None
    values: tuple[Any, ...] = ()
    start: float = 0
    step: float = 1

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise ValueError(f"kind must be one of {', '.join(_KINDS)}, got {self.kind!r}")
        if self.kind == "queue" and not self.values:
            raise ValueError("values must not be empty for a queue strategy")
        if self.kind != "queue" and self.values:
            raise ValueError(f"values is only valid for a queue strategy, got kind {self.kind!r}")

    def build(self) -> Strategy:
        """Return a fresh strategy instance. State is never shared between builds."""
        if self.kind == "fixed":
            return FixedValue(self.value)
        elif self.kind == "counter":
            return IncrementingCounter(start=self.start, step=self.step)
        else:  # queue
            return Queue(self.values)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> StrategySpec:
        """Build a spec from a plain dict with a ``kind`` key."""
        if "kind" not in data:
            raise ValueError("strategy spec requires a 'kind' key")
        kwargs: dict[str, Any] = {"kind": str(data["kind"])}
        if "value" in data:
            kwargs["value"] = data["value"]
        if "values" in data:
            kwargs["values"] = tuple(data["values"])
        if "start" in data:
            kwargs["start"] = data["start"]
        if "step" in data:
            kwargs["step"] = data["step"]
        return StrategySpec(**kwargs)


@dataclass(frozen=True)
class PinSet:
    """A set of symbols to pin, keyed by dotted symbol name."""

    pins: Mapping[str, StrategySpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in self.pins:
            if not isinstance(name, str) or "." not in name:
                raise ValueError(f"symbol names must be dotted import paths, got {name!r}")
        object.__setattr__(self, "pins", MappingProxyType(dict(self.pins)))

    def __len__(self) -> int:
        return len(self.pins)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> PinSet:
        """Build a pin set from a plain dict.

        Values may be a strategy dict (``{"kind": "counter", "start": 5}``),
        a list (queue) or any other value (fixed).
        """
        pins: dict[str, StrategySpec] = {}
        for name, raw in data.items():
            if isinstance(raw, StrategySpec):
                pins[name] = raw
            elif isinstance(raw, dict):
                pins[name] = StrategySpec.from_dict(raw)
            elif isinstance(raw, (list, tuple)):
                pins[name] = StrategySpec(kind="queue", values=tuple(raw))
            else:
                pins[name] = StrategySpec(kind="fixed", value=raw)
        return PinSet(pins)

    @staticmethod
    def from_env(prefix: str = "FIXATE") -> PinSet:
        """Build a pin set from the JSON object in ``{prefix}_PINS``."""
        raw = os.environ.get(f"{prefix}_PINS")
        if raw is None or not raw.strip():
            return PinSet()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{prefix}_PINS is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(
                f"{prefix}_PINS must be a JSON object, got {type(data).__name__}"
            )
        return PinSet.from_dict(data)
