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

import dataclasses
import json

import pytest

from fixate import FixedValue, IncrementingCounter, PinSet, Queue, StrategySpec

# --- StrategySpec ---


class TestStrategySpec:
    def test_fixed(self) -> None:
        spec = StrategySpec(kind="fixed", value=1000)
        strategy = spec.build()
        assert isinstance(strategy, FixedValue)
        assert strategy.mock(()) == 1000

    def test_counter(self) -> None:
        spec = StrategySpec(kind="counter", start=5, step=2)
        strategy = spec.build()
        assert isinstance(strategy, IncrementingCounter)
        assert [strategy.mock(()) for _ in range(3)] == [5, 7, 9]

    def test_queue(self) -> None:
        strategy = StrategySpec(kind="queue", values=(1, 2)).build()
        assert isinstance(strategy, Queue)
        assert [strategy.mock(()) for _ in range(3)] == [1, 2, 2]

    def test_build_returns_fresh_instances(self) -> None:
        spec = StrategySpec(kind="counter")
        a = spec.build()
        a.mock(())
        assert spec.build().mock(()) == 0

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="kind"):
            StrategySpec(kind="sometimes")

    def test_queue_requires_values(self) -> None:
        with pytest.raises(ValueError, match="values"):
            StrategySpec(kind="queue")

    def test_values_only_for_queue(self) -> None:
        with pytest.raises(ValueError, match="values"):
            StrategySpec(kind="fixed", values=(1,))

    def test_frozen(self) -> None:
        spec = StrategySpec(kind="fixed", value=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            spec.value = 2  # type: ignore[misc]


class TestStrategySpecFromDict:
    def test_counter(self) -> None:
        spec = StrategySpec.from_dict({"kind": "counter", "start": 10, "step": 5})
        assert spec == StrategySpec(kind="counter", start=10, step=5)

    def test_queue_list_becomes_tuple(self) -> None:
        spec = StrategySpec.from_dict({"kind": "queue", "values": [1, 2]})
        assert spec.values == (1, 2)

    def test_missing_kind(self) -> None:
        with pytest.raises(ValueError, match="kind"):
            StrategySpec.from_dict({"value": 1})


# --- PinSet ---


class TestPinSetFromDict:
    def test_shorthands(self) -> None:
        pins = PinSet.from_dict(
            {
                "time.time": 1000,
                "random.random": [0.1, 0.2],
                "random.randint": {"kind": "counter", "start": 1},
            }
        )
        assert len(pins) == 3
        assert pins.pins["time.time"] == StrategySpec(kind="fixed", value=1000)
        assert pins.pins["random.random"] == StrategySpec(kind="queue", values=(0.1, 0.2))
        assert pins.pins["random.randint"].kind == "counter"

    def test_spec_passthrough(self) -> None:
        spec = StrategySpec(kind="fixed", value=None)
        assert PinSet.from_dict({"time.time": spec}).pins["time.time"] is spec

    def test_none_is_fixed(self) -> None:
        assert PinSet.from_dict({"os.getpid": None}).pins["os.getpid"].kind == "fixed"

    def test_undotted_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="dotted"):
            PinSet.from_dict({"time": 1})

    def test_pins_are_read_only(self) -> None:
        pins = PinSet.from_dict({"time.time": 1})
        with pytest.raises(TypeError):
            pins.pins["random.random"] = StrategySpec(kind="fixed")  # type: ignore[index]

    def test_empty(self) -> None:
        assert len(PinSet()) == 0


class TestPinSetFromEnv:
    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FIXATE_PINS", raising=False)
        assert len(PinSet.from_env()) == 0

    def test_blank(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIXATE_PINS", "  ")
        assert len(PinSet.from_env()) == 0

    def test_json_object(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(
            "FIXATE_PINS",
            json.dumps({"time.time": 1000, "random.random": {"kind": "queue", "values": [1]}}),
        )
        pins = PinSet.from_env()
        assert pins.pins["time.time"].value == 1000
        assert pins.pins["random.random"].values == (1,)

    def test_custom_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYAPP_PINS", '{"time.time": 5}')
        assert PinSet.from_env("MYAPP").pins["time.time"].value == 5

    def test_malformed_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIXATE_PINS", "{not json")
        with pytest.raises(ValueError, match="FIXATE_PINS"):
            PinSet.from_env()

    def test_non_object_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIXATE_PINS", "[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            PinSet.from_env()
