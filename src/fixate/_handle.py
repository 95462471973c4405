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

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fixate._types import Target


@dataclass(frozen=True)
class OriginalHandle:
    """Callable bound permanently to a symbol's true implementation.

    Returned by ``Registry.override()``. It keeps working after the symbol
    is overridden again, restored, or the registry is closed.
    """

    name: str
    target: Target = field(repr=False)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.target(*args, **kwargs)

    def invoke(self, args: Sequence[Any]) -> Any:
        """Call the original with a marshaled argument sequence."""
        return self.target(*args)
