from numpy.typing import NDArray

import numpy as np

from ..errors import ConstructionError


def _as_2d(x: NDArray) -> NDArray:
    """Converts input to a 2-D float array.

    A scalar becomes shape (1, 1) and a 1-D array is reshaped to (1, n).
    Higher-dimensional arrays are kept unchanged except for dtype casting
    to float.

    Args:
        x (NDArray): Input array of shape (), (n,), (n, d), or higher.

    Returns:
        NDArray: Float array. If input was 1-D, returns shape (1, n).
    """
    x = np.asarray(x, dtype=float)
    if x.ndim == 0:
        return x.reshape(1, 1)
    return x.reshape(1, -1) if x.ndim == 1 else x


def _as_points(x: NDArray, dim: int) -> NDArray:
    """Normalizes query points to rows of a (n, dim) float array.

    For ``dim == 1`` a 1-D input is read as n scalar points; otherwise a
    1-D input is read as a single point.

    Raises:
        ValueError: If the trailing dimension does not equal ``dim``.
    """
    x = np.asarray(x, dtype=float)
    if dim == 1 and x.ndim == 1:
        x = x.reshape(-1, 1)
    X = _as_2d(x)
    if X.ndim != 2 or X.shape[1] != dim:
        raise ValueError(f"points must have shape ({dim},) or (n, {dim}); got {x.shape!r}")
    return X


def _check_spd(C: NDArray, tol: float = 1e-12) -> NDArray:
    """Validates that a matrix is a symmetric positive-definite covariance.

    Unlike a jittered symmetrization, degenerate input is rejected rather
    than silently regularized.

    Args:
        C (NDArray): Square matrix of shape (d, d).
        tol (float, optional): Absolute tolerance for the symmetry check.
            Defaults to 1e-12.

    Returns:
        NDArray: The matrix as a float array.

    Raises:
        ConstructionError: If ``C`` is not square, not finite, not symmetric,
            or not positive definite.
    """
    C = np.asarray(C, dtype=float)
    if C.ndim != 2 or C.shape[0] != C.shape[1]:
        raise ConstructionError(f"cov must be a square (d, d) matrix; got shape {C.shape!r}")
    if not np.all(np.isfinite(C)):
        raise ConstructionError("cov must contain only finite values")
    if not np.allclose(C, C.T, rtol=0.0, atol=tol):
        raise ConstructionError("cov must be symmetric")
    try:
        np.linalg.cholesky(C)
    except np.linalg.LinAlgError as e:
        raise ConstructionError("cov must be positive definite") from e
    return C


def _to_1d_vector(values: NDArray) -> NDArray[np.floating]:
    """Normalizes input to a 1-D float vector of shape (n,).

    Accepts scalars, 1-D arrays, or 2-D column vectors and converts them
    to a standardized 1-D float array.

    Args:
        values (NDArray): Input values as scalar, (n,), or (n, 1).

    Returns:
        NDArray[np.floating]: Flattened 1-D array.

    Raises:
        ValueError: If the input is not scalar, (n,), or (n, 1).
    """
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 0:
        return arr.reshape(1)
    if arr.ndim == 1:
        return arr
    if arr.ndim == 2 and arr.shape[1] == 1:
        return arr[:, 0]
    raise ValueError("values must be scalar, (n,), or (n,1).")
