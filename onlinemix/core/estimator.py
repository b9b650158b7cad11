import logging
from typing import List, Sequence, Tuple
from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from ..custom_types import ArrayLike, DTypeLike, Float_T, PRNG
from ..errors import ConfigurationError, UnsupportedOperationError
from ._utils import _as_points
from .distributions import Distribution

__all__ = [
    "MixtureModel",
    "BoundedEstimator",
]

logger = logging.getLogger(__name__)


class MixtureModel(ABC):
    """Anything that accumulates density components one at a time."""

    @abstractmethod
    def observe(self, component: Distribution) -> None:
        raise NotImplementedError


def _as_bound(x: ArrayLike, name: str) -> NDArray[np.floating]:
    b = np.array(x, dtype=float)
    if b.ndim == 0:
        b = b.reshape(1)
    if b.ndim != 1 or b.shape[0] < 1:
        raise ConfigurationError(f"{name} bound must be a non-empty vector of shape (d,); got {b.shape!r}")
    if not np.all(np.isfinite(b)):
        raise ConfigurationError(f"{name} bound must contain only finite values")
    b.setflags(write=False)
    return b


class BoundedEstimator(MixtureModel, Distribution[Float_T]):
    """Equally weighted mixture of observed components, clipped to a box.

    The estimator owns an append-only list of density components. Its
    density at a point is the plain arithmetic mean of the component
    densities, so every new observation rescales all earlier contributions
    by ``1/len(observations)``. The estimator itself performs no I/O and
    no randomness (except in :meth:`sample`, which uses a caller supplied
    generator).

    Bound check:
        A point is clipped to zero only when it is strictly less than the
        lower bound on every axis *and* strictly less than the upper bound on
        every axis. A point above the upper bound is not clipped.

    Scalar type:
        Densities are accumulated in float64 and converted to ``dtype`` on
        return, so the same estimator serves single and double precision
        consumers. The additive identity is ``dtype(0)``.

    Attributes:
        observations: Observed components, oldest first.
    """

    def __init__(
        self,
        bounds: Tuple[ArrayLike, ArrayLike],
        *,
        dtype: DTypeLike = np.float64,
        rng: PRNG | None = None,
    ):
        """Initializes an empty estimator.

        Args:
            bounds: ``(lower, upper)`` corners of the bounding box, each a
                vector of shape (d,) (a scalar is read as d == 1). Copied.
            dtype: Floating scalar type densities are reported in.
                Defaults to ``np.float64``.
            rng: Random number generator used by :meth:`sample` to pick
                components. If ``None``, a default generator is created.

        Raises:
            ConfigurationError: If the bounds are malformed or
                ``lower > upper`` on any axis, or ``dtype`` is not floating.
        """
        try:
            lower, upper = bounds
        except (TypeError, ValueError) as e:
            raise ConfigurationError("bounds must be a (lower, upper) pair") from e

        lo = _as_bound(lower, "lower")
        hi = _as_bound(upper, "upper")
        if lo.shape != hi.shape:
            raise ConfigurationError(f"lower and upper bounds differ in shape: {lo.shape!r} vs {hi.shape!r}")
        if np.any(lo > hi):
            raise ConfigurationError(f"lower bound exceeds upper bound: {lo.tolist()} > {hi.tolist()}")

        try:
            self._dtype = np.dtype(dtype)
        except TypeError as e:
            raise ConfigurationError(f"invalid dtype {dtype!r}") from e
        if not np.issubdtype(self._dtype, np.floating):
            raise ConfigurationError(f"dtype must be a floating type; got {self._dtype}")

        self._bounds = (lo, hi)
        self._rng = rng or np.random.default_rng()
        self.observations: List[Distribution] = []

    @property
    def bounds(self) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Read-only ``(lower, upper)`` bound vectors."""
        return self._bounds

    @property
    def dimension(self) -> int:
        return int(self._bounds[0].shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def zero(self) -> Float_T:
        """The additive identity of the scalar type."""
        return self._dtype.type(0)

    @property
    def n_observations(self) -> int:
        return len(self.observations)

    def __len__(self) -> int:
        return len(self.observations)

    def observe(self, component: Distribution) -> None:
        """Appends ``component`` to the mixture.

        Raises:
            TypeError: If ``component`` has no callable ``density``.
        """
        if not callable(getattr(component, "density", None)):
            raise TypeError(f"component must provide density(); got {type(component).__name__}")
        self.observations.append(component)
        logger.debug("observed %r (%d total)", component, len(self.observations))

    def _clipped(self, X: NDArray[np.floating]) -> NDArray[np.bool_]:
        lo, hi = self._bounds
        return np.all(X < lo, axis=1) & np.all(X < hi, axis=1)

    def density(self, values: ArrayLike) -> NDArray[Float_T]:
        """Evaluates the aggregate density at the given points.

        Args:
            values: Points of shape (d,) or (n, d).

        Returns:
            Column of shape (n, 1) and type ``dtype``. Rows are zero when no
            component has been observed or the point is clipped by the bound
            check; otherwise the mean of the component densities.

        Raises:
            ValueError: If the points do not match the bound dimension.
        """
        X = _as_points(values, self.dimension)       # (n, d)
        out = np.zeros((X.shape[0], 1), dtype=self._dtype)
        if not self.observations:
            return out

        inside = ~self._clipped(X)
        if not np.any(inside):
            return out

        Xin = X[inside]
        total = np.zeros(Xin.shape[0], dtype=np.float64)
        for component in self.observations:
            total += np.asarray(component.density(Xin), dtype=np.float64).reshape(-1)
        out[inside, 0] = (total * (1.0 / len(self.observations))).astype(self._dtype)
        return out

    def log_density(self, values: ArrayLike) -> NDArray[Float_T]:
        """Not supported for the bounded mixture.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError("log_density is not supported by BoundedEstimator")

    def sample(self, n_samples: int = 1) -> NDArray[np.floating]:
        """Draws points from the equally weighted mixture.

        Each draw picks an observed component uniformly at random and samples
        from it. The bound check is not applied to the draws.

        Returns:
            Samples of shape (n_samples, d).

        Raises:
            UnsupportedOperationError: If nothing has been observed yet.
        """
        if not self.observations:
            raise UnsupportedOperationError("cannot sample from an estimator with no observations")
        n_samples = int(n_samples)
        idx = self._rng.integers(0, len(self.observations), size=n_samples)
        out = np.empty((n_samples, self.dimension), dtype=float)
        for k in np.unique(idx):
            rows = np.flatnonzero(idx == k)
            draws = self.observations[k].sample(len(rows))
            out[rows] = np.asarray(draws, dtype=float).reshape(len(rows), self.dimension)
        return out

    def recent(self, k: int) -> Sequence[Distribution]:
        """Returns up to ``k`` of the most recent observations, newest first."""
        if k < 0:
            raise ValueError("k must be non-negative")
        return self.observations[::-1][:k]

    def contributions(self, values: ArrayLike, k: int) -> NDArray[np.floating]:
        """Per-component share of the aggregate density for recent components.

        Each row is one of the ``k`` newest components (newest first)
        evaluated at ``values`` and divided by the total number of
        observations, i.e. its term in the mixture mean. The bound check is
        not applied.

        Returns:
            Array of shape (min(k, n_observations), n).
        """
        X = _as_points(values, self.dimension)
        comps = self.recent(k)
        if not comps:
            return np.zeros((0, X.shape[0]), dtype=float)
        scale = 1.0 / len(self.observations)
        return np.vstack([
            np.asarray(c.density(X), dtype=float).reshape(-1) * scale
            for c in comps
        ])

    def __repr__(self) -> str:
        lo, hi = self._bounds
        return (f"BoundedEstimator(bounds=({lo.tolist()}, {hi.tolist()}), "
                f"dtype={self._dtype.name}, n_observations={len(self.observations)})")
