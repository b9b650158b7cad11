from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

import scipy.stats as sp
from scipy.stats import norm

from ..custom_types import ArrayLike, Float_T, PRNG
from ..errors import ConstructionError
from ._utils import _as_points, _check_spd, _to_1d_vector
from .distributions import Distribution

__all__ = [
    "Multivariate",
    "Normal1D",
    "MvNormal",
]


class Multivariate(Distribution[Float_T], ABC):
    """Abstract base class for multivariate, real-valued vector distributions.

    Represents probability distributions in ℝᵈ with a fixed dimension `d`.
    Subclasses define how to compute means and covariances. The event shape
    is assumed to be `(d,)`.

    Notes:
        - All subclasses should ensure shape consistency across methods.
        - Default dimension inference is based on the output of :meth:`mean`.
    """

    @abstractmethod
    def mean(self) -> NDArray[Float_T]:
        """Computes the mean vector of the distribution.

        Returns:
            Mean vector μ with shape `(d,)`.
        """
        raise NotImplementedError

    @abstractmethod
    def cov(self) -> NDArray[np.floating]:
        """Computes the covariance matrix of the distribution.

        Returns:
            Covariance matrix Sigma with shape `(d, d)`.
        """
        raise NotImplementedError

    # ---- Dimension helper ----
    @property
    def dimension(self) -> int:
        """Infers the dimensionality of the distribution.

        The default implementation infers `d` from the shape of :meth:`mean`.
        Subclasses may override this method for fixed or analytically known
        dimensions.

        Returns:
            Number of coordinates `d`.

        Raises:
            ValueError: If :meth:`mean` does not return a 1D array.
        """
        m = self.mean()
        if m.ndim != 1:
            raise ValueError("mean() must return a 1D array of shape (d,).")
        return int(m.shape[0])


class Normal1D(Multivariate[np.floating]):
    """Univariate Normal distribution N(μ, σ²) implemented as a 1D Multivariate.

    Shape policy:
        - ``sample(n)`` -> (n, 1)
        - ``density`` / ``log_density`` always return (n, 1)
          even though they are scalar per sample.

    Attributes:
        mu: Mean of the distribution.
        sigma: Standard deviation (must be > 0).
        _rng: Random number generator used for sampling.
    """

    def __init__(self, mu: float, sigma: float, *, rng: PRNG | None = None):
        """Initializes a Normal1D distribution.

        Args:
            mu: Mean of the distribution.
            sigma: Standard deviation (must be > 0).
            rng: Random number generator.
                If ``None``, a default generator is created.

        Raises:
            ConstructionError: If ``mu`` is not finite or ``sigma`` is not
                a finite positive number.
        """
        if not np.isfinite(mu):
            raise ConstructionError("mu must be finite")
        if not (np.isfinite(sigma) and sigma > 0):
            raise ConstructionError("sigma must be > 0")
        self.mu = float(mu)
        self.sigma = float(sigma)
        self._rng = rng or np.random.default_rng()

        self._norm = norm(loc=self.mu, scale=self.sigma)

    def sample(self, n_samples: int = 1) -> NDArray[np.floating]:
        """Draws random samples from the distribution.

        Args:
            n_samples: Number of samples to generate.

        Returns:
            Samples of shape (n_samples, 1).
        """
        xs = self._norm.rvs(size=(int(n_samples), 1), random_state=self._rng)
        return np.asarray(xs, dtype=float)  # (n, 1)

    def density(self, values: ArrayLike) -> NDArray[np.floating]:
        """Evaluates the probability density function (PDF) at given values.

        Args:
            values: Points at which to evaluate the PDF.

        Returns:
            PDF values of shape (n, 1).
        """
        v = _to_1d_vector(values)          # (n,)
        return np.asarray(self._norm.pdf(v), dtype=float).reshape(-1, 1)

    def log_density(self, values: ArrayLike) -> NDArray[np.floating]:
        """Evaluates the log of the probability density function.

        Args:
            values: Points at which to evaluate the log-PDF.

        Returns:
            Log-PDF values of shape (n, 1).
        """
        v = _to_1d_vector(values)          # (n,)
        return np.asarray(self._norm.logpdf(v), dtype=float).reshape(-1, 1)

    def mean(self) -> NDArray[np.floating]:
        return np.array([self.mu], dtype=float)          # (1,)

    def cov(self) -> NDArray[np.floating]:
        return np.array([[self.sigma ** 2]], dtype=float)  # (1,1)

    def __repr__(self) -> str:
        return f"Normal1D(mu={self.mu!r}, sigma={self.sigma!r})"


class MvNormal(Multivariate[np.floating]):
    """Multivariate Normal distribution N(mu, Sigma) using SciPy.

    Represents a d-dimensional Gaussian distribution implemented via
    ``scipy.stats.multivariate_normal``. The covariance must be symmetric
    positive definite; degenerate covariances are rejected at construction
    with :class:`ConstructionError` instead of being regularized.

    Shape policy:
        - ``sample(n)`` -> (n, d)
        - ``density`` / ``log_density`` -> (n, 1)
          (scalar-per-sample outputs returned as column vectors)

    Attributes:
        _mean: Mean vector of shape (d,).
        _cov: Covariance matrix of shape (d, d).
        _rng: Random number generator for sampling.
    """

    def __init__(self, mean: ArrayLike, cov: ArrayLike, *, rng: PRNG | None = None):
        """Initializes a multivariate Normal distribution.

        Args:
            mean: Mean vector of shape (d,).
            cov: Covariance matrix of shape (d, d).
            rng: Random number generator.
                If ``None``, a default generator is created.

        Raises:
            ConstructionError: If ``mean`` or ``cov`` have incompatible shapes,
                or ``cov`` is not symmetric positive definite.
        """
        m = np.array(mean, dtype=float)
        if m.ndim != 1 or m.shape[0] < 1:
            raise ConstructionError("mean must be shape (d,)")
        if not np.all(np.isfinite(m)):
            raise ConstructionError("mean must contain only finite values")
        C = _check_spd(cov).copy()
        if C.shape[0] != m.shape[0]:
            raise ConstructionError("cov must be (d,d) and match mean dimension")

        self._mean = m
        self._cov = C
        self._mean.setflags(write=False)
        self._cov.setflags(write=False)
        self._rng = rng or np.random.default_rng()

        self._mvn = sp.multivariate_normal(mean=self._mean, cov=self._cov, allow_singular=False)

    @classmethod
    def diagonal(cls, mean: ArrayLike, variances: ArrayLike, *, rng: PRNG | None = None) -> "MvNormal":
        """Builds an axis-aligned normal from per-coordinate variances.

        Args:
            mean: Mean vector of shape (d,).
            variances: Positive variances of shape (d,).
            rng: Random number generator.

        Raises:
            ConstructionError: If any variance is not positive or the shapes
                disagree.
        """
        v = np.asarray(variances, dtype=float)
        if v.ndim != 1:
            raise ConstructionError("variances must be shape (d,)")
        return cls(mean=mean, cov=np.diag(v), rng=rng)

    def sample(self, n_samples: int = 1) -> NDArray[np.floating]:
        """Generates random samples from the distribution.

        Args:
            n_samples: Number of samples to draw.

        Returns:
            Samples of shape (n_samples, d).
        """
        x = self._mvn.rvs(size=int(n_samples), random_state=self._rng)
        # SciPy squeezes (1, d) to (d,) and, for d == 1, (n, 1) to (n,)
        return np.asarray(x, dtype=float).reshape(int(n_samples), self.dimension)

    def density(self, values: ArrayLike) -> NDArray[np.floating]:
        """Evaluates the probability density function (PDF) at given points.

        Args:
            values: Points at which to evaluate the PDF,
                of shape (d,) or (n, d).

        Returns:
            Column vector of PDF values, shape (n, 1).
        """
        X = _as_points(values, self.dimension)       # (n, d)
        p = self._mvn.pdf(X)                         # (n,) or scalar from SciPy
        return np.asarray(p, dtype=float).reshape(-1, 1)   # (n,1)

    def log_density(self, values: ArrayLike) -> NDArray[np.floating]:
        """Evaluates the log of the probability density function.

        Args:
            values: Points at which to evaluate the log-PDF,
                of shape (d,) or (n, d).

        Returns:
            Column vector of log-PDF values, shape (n, 1).
        """
        X = _as_points(values, self.dimension)       # (n, d)
        lp = self._mvn.logpdf(X)
        return np.asarray(lp, dtype=float).reshape(-1, 1)  # (n,1)

    def mean(self) -> NDArray[np.floating]:
        """Returns the mean vector.

        Returns:
            Mean vector of shape (d,).
        """
        return self._mean  # (d,)

    def cov(self) -> NDArray[np.floating]:
        """Returns the covariance matrix.

        Returns:
            Covariance matrix of shape (d, d).
        """
        return self._cov   # (d,d)

    @property
    def dimension(self) -> int:
        return int(self._mean.shape[0])

    def __repr__(self) -> str:
        return f"MvNormal(mean={self._mean.tolist()!r}, cov={self._cov.tolist()!r})"
