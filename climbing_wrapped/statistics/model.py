"""
Data models for statistics module.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Optional, Union


StatValue = Union[int, float, str, None, List[Any], Dict[str, Any]]


@dataclass
class Stats:
    """
    Mutable container used while statistics are being collected.

    Most sections are categories (e.g. 'basicStats', 'funStats') holding named
    values; a few sections are a single value (e.g. 'multiPitchCount') and are
    stored with set_category().
    """
    categories: Dict[str, Any] = field(default_factory=dict)

    def add_value(self, category: str, name: str, value: StatValue) -> None:
        """Add a statistical value to a category."""
        if not isinstance(self.categories.get(category), dict):
            self.categories[category] = {}
        self.categories[category][name] = value

    def set_category(self, category: str, value: StatValue) -> None:
        """Set a whole section at once."""
        self.categories[category] = value

    def get_value(self, category: str, name: str, default: Optional[StatValue] = None) -> Optional[StatValue]:
        """Get a statistical value from a category."""
        values = self.categories.get(category)
        if not isinstance(values, dict):
            return default
        return values.get(name, default)

    def get_category(self, category: str, default: Any = None) -> Any:
        """Get a whole section."""
        return self.categories.get(category, default)

    def merge(self, other: Stats) -> None:
        """Merge another Stats object into this one."""
        for category, values in other.categories.items():
            if isinstance(values, dict) and isinstance(self.categories.get(category), dict):
                self.categories[category].update(values)
            else:
                self.categories[category] = values

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return dict(self.categories)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Stats:
        """Create from a plain dictionary."""
        return cls(categories=data)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


class StatsResult(Mapping):
    """
    Finished, read-only climbing report.

    Behaves like a nested dict: nested sections are read-only mappings and
    lists are tuples. Use to_dict() for a mutable copy (e.g. for JSON).
    """
    __slots__ = ('_data',)

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = _freeze(data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"StatsResult({list(self._data.keys())})"

    def to_dict(self) -> Dict[str, Any]:
        """Deep, mutable copy of the report."""
        return _thaw(self._data)

    @classmethod
    def from_stats(cls, stats: Stats) -> StatsResult:
        return cls(stats.categories)
