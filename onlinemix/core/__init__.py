from .distributions import Distribution
from .multivariate import Multivariate, Normal1D, MvNormal
from .estimator import MixtureModel, BoundedEstimator
from .driver import DriverConfig, Frame, MixtureDriver, grid_axis, evaluate_grid, simulate
