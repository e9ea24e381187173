"""
Custom values injected into the structure via --set / --set-keyless.
"""

from typing import Dict, Iterator, Optional

from pydantic import BaseModel


class CustomValue(BaseModel):
    """A user-defined row."""

    print_key: bool = True
    value: str = ""


class ValueStore:
    """Insertion-ordered mapping from structure token to custom value."""

    def __init__(self):
        self._values: Dict[str, CustomValue] = {}

    def set(self, key: str, value: str, print_key: bool) -> CustomValue:
        """Create or overwrite an entry. Last write wins."""
        entry = self._values.get(key)
        if entry is None:
            entry = CustomValue()
            self._values[key] = entry
        entry.value = value
        entry.print_key = print_key
        return entry

    def get(self, key: str) -> Optional[CustomValue]:
        return self._values.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
