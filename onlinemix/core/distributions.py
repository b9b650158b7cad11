from typing import Generic
from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from ..custom_types import T
from ..errors import UnsupportedOperationError

__all__ = [
    "Distribution",
]


# -------------------------- Abstract Classes ----------------------------


class Distribution(Generic[T], ABC):
    """
    Abstract base class for density components.

    A density component is anything that can be sampled to produce points
    in its domain and evaluated at a point to produce a non-negative density
    value. Components are immutable once constructed: all parameters are
    fixed in ``__init__`` and every evaluation is a pure function of them.

    Subclasses that cannot support an optional operation (log-density) leave
    it unimplemented; calling it raises :class:`UnsupportedOperationError`.

    Type Variables:
        T: Numeric data type of the domain (e.g., np.floating).
    """

    @abstractmethod
    def sample(self, n_samples: int = 1) -> NDArray[T]:
        """
        Samples data points from the distribution.

        Consumes randomness from the generator held by the distribution and
        has no other observable effect.

        Args:
            n_samples: The number of samples to generate.

        Returns:
            NDArray[T]: An array of shape (n_samples, d).
        """
        raise NotImplementedError

    @abstractmethod
    def density(self, values: NDArray) -> NDArray[np.floating]:
        """
        Computes the probability density p(values) under this distribution.

        Must be deterministic and non-negative. It is not required to
        integrate to one over any particular region.

        Args:
            values: Points of shape (d,) or (n, d).

        Returns:
            NDArray[np.floating]: Density values as a column of shape (n, 1).
        """
        raise NotImplementedError

    def log_density(self, values: NDArray) -> NDArray[np.floating]:
        """
        Computes the log-probability density log p(values).

        Optional. Subclasses that can evaluate log-densities override it.

        Args:
            values: Points of shape (d,) or (n, d).

        Returns:
            NDArray[np.floating]: Log-density values of shape (n, 1).

        Raises:
            UnsupportedOperationError: If the subclass does not implement it.
        """
        raise UnsupportedOperationError(
            f"log_density is not supported by {type(self).__name__}"
        )
