"""
Example: the bound check on a two-component mixture
---------------------------------------------------

Only points strictly below both corners of the box are clipped to zero;
points beyond the upper corner still see the mixture tails.
"""
import numpy as np

from onlinemix import BoundedEstimator, MvNormal, Normal1D, UnsupportedOperationError


est = BoundedEstimator(([-1.0, -1.0], [1.0, 1.0]))
est.observe(MvNormal(np.zeros(2), 0.01 * np.eye(2)))
est.observe(MvNormal(np.array([0.8, 0.8]), 0.5 * np.eye(2)))

for point in ([0.0, 0.0], [1.5, 1.5], [-1.5, -1.5], [-1.5, 0.5]):
    print(point, "->", est.density(point)[0, 0])

try:
    est.log_density([0.0, 0.0])
except UnsupportedOperationError as e:
    print("log_density:", e)

single = BoundedEstimator((-1.0, 1.0), dtype=np.float32)
single.observe(Normal1D(0.0, 0.5))
print(single.density(np.linspace(-2, 2, 5)).ravel())
