import logging

from onlinemix.errors import (
    OnlineMixError,
    ConstructionError,
    UnsupportedOperationError,
    ConfigurationError,
)
from onlinemix.core.distributions import Distribution
from onlinemix.core.multivariate import Multivariate, Normal1D, MvNormal
from onlinemix.core.estimator import MixtureModel, BoundedEstimator
from onlinemix.core.driver import DriverConfig, Frame, MixtureDriver, grid_axis, evaluate_grid, simulate
from onlinemix.logging_config import setup_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
