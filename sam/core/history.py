"""In-memory record of successive section crossings (a discrete Poincaré map)."""

from typing import Any, Dict, List, Optional

import numpy as np


class CrossingHistory:
    """
    Buffer of records, one per crossing (key -> value).
    poincare_map() fills the keys 'time' and 'state'.
    """

    def __init__(self, max_length: Optional[int] = None) -> None:
        """
        Args:
            max_length: maximum number of records kept (None = unlimited).
        """
        self._max_length = max_length
        self._data: Dict[str, List[Any]] = {}
        self._count = 0

    def append(self, **kwargs: Any) -> None:
        """Add one record."""
        for key, value in kwargs.items():
            if key not in self._data:
                self._data[key] = []
            self._data[key].append(value)
        self._count += 1
        if self._max_length is not None and self._count > self._max_length:
            for key in self._data:
                self._data[key] = self._data[key][-self._max_length:]
            self._count = self._max_length

    def clear(self) -> None:
        self._data.clear()
        self._count = 0

    def get(self, key: str) -> np.ndarray:
        """Series for one key as a numpy array (empty if the key is unknown)."""
        if key not in self._data:
            return np.array([])
        return np.array(self._data[key])

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {k: self.get(k) for k in self._data}

    @property
    def times(self) -> np.ndarray:
        """Crossing times, shape (n,)."""
        return self.get("time")

    @property
    def states(self) -> np.ndarray:
        """Crossing states, shape (n, N * d)."""
        return self.get("state")

    def __len__(self) -> int:
        return self._count
