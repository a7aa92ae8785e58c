"""Function-key bindings shown in the form's legend."""

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Optional

from ..exceptions import FunctionKeyError
from ..terminal.keys import FUNCTION_KEYS, Key
from .field_kinds import FieldValue

if TYPE_CHECKING:
    from .collection import FieldCollection
    from .controller import RunControl
    from .fields import Field

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 12
RESERVED_KEYS = (Key.F1, Key.F2, Key.F3)

FunctionKeyOperation = Callable[
    ["FieldCollection", Optional["Field"], "RunControl"],
    Optional[Dict[str, FieldValue]],
]
"""Handler run for a function key.

It receives the form's fields, the focused field (or None) and the run
control. Returning a dict replaces the form result; returning None leaves it
alone. Handlers stop the form with ``run.stop()``.
"""


def clean_binding_name(name: str) -> str:
    """Keep word characters and spaces, at most twelve of them."""
    return re.sub(r"[^\w ]", "", name).strip()[:MAX_NAME_LENGTH]


@dataclass
class FunctionKeyBinding:
    """One function key, its legend name and its handler."""

    name: str
    key: Key
    operation: FunctionKeyOperation = field(repr=False)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.key, Key) or not self.key.is_function_key:
            raise FunctionKeyError(
                "Bindings must use F1-F12", context={"key": self.key, "name": self.name}
            )
        self.name = clean_binding_name(self.name)

    @property
    def number(self) -> int:
        return self.key.function_number

    @property
    def legend(self) -> str:
        return f"F{self.number}={self.name}"

    def invoke(
        self,
        fields: "FieldCollection",
        active: Optional["Field"],
        run: "RunControl",
    ) -> Optional[Dict[str, FieldValue]]:
        return self.operation(fields, active, run)


class FunctionKeyCollection:
    """At most one binding per function key, iterated in key order."""

    def __init__(self, bindings: Optional[List[FunctionKeyBinding]] = None) -> None:
        self._bindings: Dict[Key, FunctionKeyBinding] = {}
        for binding in bindings or []:
            self.add(binding)

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[FunctionKeyBinding]:
        return iter(sorted(self._bindings.values(), key=lambda b: b.number))

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __getitem__(self, key: Key) -> FunctionKeyBinding:
        return self._bindings[key]

    def get(self, key: Key) -> Optional[FunctionKeyBinding]:
        return self._bindings.get(key)

    def add(self, binding: FunctionKeyBinding) -> bool:
        """Add ``binding``; returns False if its key is already bound."""
        if binding.key in self._bindings:
            current = self._bindings[binding.key]
            logger.debug(f"{binding.key.name} already bound to {current.name}")
            return False
        self._bindings[binding.key] = binding
        return True

    def bind(
        self, key: Key, name: str, operation: FunctionKeyOperation, enabled: bool = True
    ) -> bool:
        return self.add(FunctionKeyBinding(name, key, operation, enabled))

    def remove(self, key: Key) -> Optional[FunctionKeyBinding]:
        return self._bindings.pop(key, None)

    def next_available(self, start: Key = Key.F1) -> Optional[Key]:
        """First unbound function key at or after ``start``."""
        first = start.function_number or 1
        for key in FUNCTION_KEYS[first - 1 :]:
            if key not in self._bindings:
                return key
        return None

    def is_enabled(self, key: Key) -> bool:
        binding = self._bindings.get(key)
        return binding is not None and binding.enabled

    def set_enabled(self, key: Key, enabled: bool) -> bool:
        """Enable or disable a binding; returns True if the state changed."""
        binding = self._bindings.get(key)
        if binding is None or binding.enabled == enabled:
            return False
        binding.enabled = enabled
        return True

    @property
    def active_keys(self) -> frozenset:
        """Keys whose bindings are enabled."""
        return frozenset(k for k, b in self._bindings.items() if b.enabled)
