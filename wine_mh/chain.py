from __future__ import annotations

"""
Fixed-capacity, append-only storage for MH draws plus the sampler lifecycle enum.
"""

from enum import Enum

import numpy as np
import pandas as pd


class SamplerState(Enum):
    INITIALIZING = "initializing"
    SAMPLING = "sampling"
    DONE = "done"


class Chain:
    """
    Arena of `capacity` coefficient vectors filled front to back.

    Rows are only ever appended; every stored row is finite. After freeze()
    the chain is read-only.
    """

    def __init__(self, capacity: int, dim: int):
        if capacity < 1:
            raise ValueError(f"Chain capacity must be at least 1, got {capacity}")
        if dim < 1:
            raise ValueError(f"Coefficient dimension must be at least 1, got {dim}")
        self.capacity = capacity
        self.dim = dim
        self._draws = np.empty((capacity, dim), dtype=float)
        self._size = 0
        self._frozen = False

    def append(self, beta) -> None:
        if self._frozen:
            raise RuntimeError("Chain is frozen; no further draws can be appended.")
        if self._size >= self.capacity:
            raise RuntimeError(f"Chain is full (capacity {self.capacity}).")
        beta_arr = np.asarray(beta, dtype=float)
        if beta_arr.shape != (self.dim,):
            raise ValueError(f"Expected a draw of shape ({self.dim},), got {beta_arr.shape}")
        if not np.all(np.isfinite(beta_arr)):
            raise ValueError("Chain draws must be finite.")
        self._draws[self._size] = beta_arr
        self._size += 1

    def last(self) -> np.ndarray:
        if self._size == 0:
            raise IndexError("Chain is empty.")
        return self._draws[self._size - 1].copy()

    def freeze(self) -> None:
        self._frozen = True
        self._draws.setflags(write=False)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def to_array(self) -> np.ndarray:
        """Read-only (len, dim) view of the filled rows."""
        view = self._draws[: self._size]
        view.setflags(write=False)
        return view

    def to_frame(self, feature_names: list[str] | None = None) -> pd.DataFrame:
        return pd.DataFrame(self.to_array(), columns=feature_names)

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, idx) -> np.ndarray:
        return self.to_array()[idx]

    def __iter__(self):
        return iter(self.to_array())
