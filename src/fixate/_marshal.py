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

import inspect
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from fixate._types import Args


class ArgumentMarshaler:
    """Turns ``*args, **kwargs`` into the positional tuple strategies receive.

    Keyword arguments are bound against the original's signature so that
    ``f(1, b=2)`` and ``f(1, 2)`` reach a strategy identically. Signatures
    are looked up lazily and cached.

    A keyword that skips an optional parameter makes the tuple longer than
    the caller wrote: the skipped parameter is filled with its default, so
    ``scale(2.0, offset=1.0)`` arrives as ``(2.0, 1.0, 1.0)``.
    """

    def __init__(self, name: str, original: Any) -> None:
        self._name = name
        self._original = original
        self._signature: inspect.Signature | None = None

    def marshal(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> Args:
        if not kwargs:
            return tuple(args)

        bound = self._bind(args, kwargs)
        if bound.kwargs:
            # A keyword that skips an optional parameter leaves a gap; fill it.
            bound.apply_defaults()
            leftover = sorted(k for k in bound.kwargs if k in kwargs)
            if leftover:
                raise TypeError(
                    f"{self._name}() keyword-only arguments cannot be marshaled "
                    f"to positions: {', '.join(leftover)}"
                )
        return tuple(bound.args)

    def _bind(self, args: Sequence[Any], kwargs: Mapping[str, Any]) -> inspect.BoundArguments:
        if self._signature is None:
            try:
                self._signature = inspect.signature(self._original)
            except (TypeError, ValueError) as exc:
                raise TypeError(
                    f"{self._name}() has no introspectable signature; "
                    f"pass its arguments positionally"
                ) from exc
        return self._signature.bind(*args, **kwargs)
