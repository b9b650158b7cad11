"""
Example: Online Mixture Density over a Bounded Square
-----------------------------------------------------

Runs the headless driver for a few ticks. Each tick a diagonal normal with a
mean drawn uniformly from [-1, 1)^2 and variances drawn from [1e-4, 0.1) is
observed, and the equally weighted mixture is evaluated over a 10x10 lattice.
"""
import logging

import numpy as np

from onlinemix import DriverConfig, simulate, setup_logging


setup_logging(logging.INFO)

config = DriverConfig(seed=2024, grid_points=10, recent=10)
frames = simulate(config, n_ticks=25)

last = frames[-1]
np.set_printoptions(precision=2, suppress=True, linewidth=120)
print(f"{last.n_observations:06d} observations")
print("Lattice axis:", last.axis)
print("Mixture surface:\n", last.surface)
print("Newest component share at the peak:",
      last.contributions[0].max() if len(last.contributions) else 0.0)
