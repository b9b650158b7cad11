# custom_types.py
"""
Type definitions and aliases shared across onlinemix.

We generally follow the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
- Parameterise distributions by their scalar type with `T` / `Float_T`
"""
from __future__ import annotations
from typing import TypeAlias, TypeVar

import numpy as np
from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike,
    DTypeLike as NumpyDTypeLike,
)

from numpy import (
    floating as NumpyFloating,
    number as NumpyNumber
)

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
DTypeLike: TypeAlias = NumpyDTypeLike
Float: TypeAlias = NumpyFloating
Number: TypeAlias = NumpyNumber
PRNG: TypeAlias = NumpyRNG

T = TypeVar("T", bound=np.number)
Float_T = TypeVar("Float_T", bound=np.floating)
