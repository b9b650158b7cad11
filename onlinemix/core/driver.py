"""
Headless driver that feeds a :class:`BoundedEstimator` once per tick.

Each tick evaluates the current mixture over a fixed square lattice (the
surface a viewer would draw), then draws a new axis-aligned normal with a
uniformly placed mean and small random variances and observes it. The
rendering side is not part of this package; frames are returned as arrays.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from prefect import flow

from ..custom_types import DTypeLike
from ..errors import ConfigurationError, ConstructionError
from .estimator import BoundedEstimator
from .multivariate import MvNormal

__all__ = [
    "DriverConfig",
    "Frame",
    "MixtureDriver",
    "grid_axis",
    "evaluate_grid",
    "simulate",
]

logger = logging.getLogger(__name__)


@dataclass
class DriverConfig:
    """Configuration for :class:`MixtureDriver`.

    Attributes:
        bounds: ``(lower, upper)`` applied to every axis. Component means are
            drawn uniformly from this interval.
        dim: Dimension of the domain. The lattice evaluation needs ``dim == 2``.
        variance_range: Half-open interval the per-axis variances are drawn from.
        grid_scale: Half-width of the display lattice.
        grid_points: Lattice points per axis.
        recent: Number of newest components reported individually per frame.
        dtype: Scalar type of the reported densities.
        seed: Seed for the driver's generator; ``None`` for fresh entropy.
    """
    bounds: Tuple[float, float] = (-1.0, 1.0)
    dim: int = 2
    variance_range: Tuple[float, float] = (1e-4, 0.1)
    grid_scale: float = 1.0
    grid_points: int = 10
    recent: int = 10
    dtype: DTypeLike = np.float64
    seed: Optional[int] = None

    def __post_init__(self):
        lo, hi = self.bounds
        if not lo < hi:
            raise ConfigurationError(f"bounds must satisfy lower < upper; got {self.bounds!r}")
        vlo, vhi = self.variance_range
        if not 0 < vlo < vhi:
            raise ConfigurationError(f"variance_range must satisfy 0 < low < high; got {self.variance_range!r}")
        if self.dim < 1:
            raise ConfigurationError("dim must be >= 1")
        if self.grid_points < 1:
            raise ConfigurationError("grid_points must be >= 1")
        if self.grid_scale <= 0:
            raise ConfigurationError("grid_scale must be > 0")
        if self.recent < 0:
            raise ConfigurationError("recent must be >= 0")


@dataclass
class Frame:
    """What one tick hands to a viewer.

    ``surface`` and ``contributions`` describe the mixture *before* the
    tick's new component was observed, with ``n_observations`` components.
    """
    tick: int
    n_observations: int
    axis: NDArray[np.floating]
    surface: NDArray[np.floating]
    contributions: NDArray[np.floating] = field(repr=False)
    observed: bool = True


def grid_axis(scale: float, points: int) -> NDArray[np.floating]:
    """Half-open lattice ``-scale + 2*scale*i/points`` for ``i < points``."""
    i = np.arange(int(points), dtype=float)
    return -scale + (2.0 * scale) * i / float(points)


def _lattice(axis: NDArray[np.floating]) -> NDArray[np.floating]:
    xx, yy = np.meshgrid(axis, axis, indexing="ij")
    return np.column_stack([xx.ravel(), yy.ravel()])     # (m*m, 2)


def evaluate_grid(estimator: BoundedEstimator, axis: NDArray[np.floating]) -> NDArray[np.floating]:
    """Evaluates a 2-D estimator over the square lattice ``axis x axis``.

    Returns:
        Array of shape (m, m) with ``[i, j] = density((axis[i], axis[j]))``.

    Raises:
        ValueError: If the estimator is not two-dimensional.
    """
    if estimator.dimension != 2:
        raise ValueError(f"grid evaluation needs a 2-D estimator; got d={estimator.dimension}")
    m = len(axis)
    return estimator.density(_lattice(axis)).reshape(m, m)


class MixtureDriver:
    """Single-owner driver that observes one random component per tick."""

    def __init__(self, config: Optional[DriverConfig] = None, *, rng: Optional[np.random.Generator] = None):
        self.config = config or DriverConfig()
        self._rng = rng or np.random.default_rng(self.config.seed)
        lo, hi = self.config.bounds
        d = self.config.dim
        self.estimator = BoundedEstimator(
            (np.full(d, lo), np.full(d, hi)),
            dtype=self.config.dtype,
            rng=self._rng,
        )
        self.axis = grid_axis(self.config.grid_scale, self.config.grid_points)
        self.ticks = 0

    def draw_component(self) -> MvNormal:
        """Draws a diagonal normal with uniform mean and random variances.

        Raises:
            ConstructionError: If the drawn parameters are degenerate.
        """
        lo, hi = self.config.bounds
        vlo, vhi = self.config.variance_range
        d = self.config.dim
        mean = self._rng.uniform(lo, hi, size=d)
        variances = self._rng.uniform(vlo, vhi, size=d)
        return MvNormal.diagonal(mean, variances, rng=self._rng)

    def tick(self) -> Frame:
        """Reports the current mixture, then observes one new component."""
        n = len(self.estimator)
        if self.config.dim == 2:
            surface = evaluate_grid(self.estimator, self.axis)
            contributions = self.estimator.contributions(_lattice(self.axis), self.config.recent)
            m = len(self.axis)
            contributions = contributions.reshape(-1, m, m)
        else:
            surface = np.zeros((0, 0), dtype=self.estimator.dtype)
            contributions = np.zeros((0, 0, 0), dtype=float)

        observed = True
        try:
            self.estimator.observe(self.draw_component())
        except ConstructionError as e:
            observed = False
            logger.warning("tick %d: discarded degenerate component: %s", self.ticks, e)

        frame = Frame(
            tick=self.ticks,
            n_observations=n,
            axis=self.axis,
            surface=surface,
            contributions=contributions,
            observed=observed,
        )
        self.ticks += 1
        return frame


@flow(name="onlinemix-simulate", validate_parameters=False)
def simulate(config: Optional[DriverConfig] = None, n_ticks: int = 10) -> List[Frame]:
    """Runs ``n_ticks`` driver ticks and returns the frames in order."""
    driver = MixtureDriver(config)
    frames = []
    for _ in range(int(n_ticks)):
        frame = driver.tick()
        logger.info("%06d observations, peak density %.4g",
                    frame.n_observations, float(frame.surface.max(initial=0.0)))
        frames.append(frame)
    return frames
