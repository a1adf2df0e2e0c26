"""
A Nelder-Mead simplex optimizer
"""

from neldermead.errors import InvalidInputError
from neldermead.config import Params, SolverConfig, BoundsStrategy, SimplexInit
from neldermead.optimization import (
    Point, Simplex, Bounds, BoundedObjective, OptimizationResult,
    run_nelder_mead, optimize, minimize_unbounded, maximize_unbounded,
    minimize_bounded, maximize_bounded, minimize
)
from neldermead.utils import setup_logging

__version__ = "0.1.0"

__all__ = [
    'InvalidInputError',
    'Params', 'SolverConfig', 'BoundsStrategy', 'SimplexInit',
    'Point', 'Simplex', 'Bounds', 'BoundedObjective', 'OptimizationResult',
    'run_nelder_mead', 'optimize', 'minimize_unbounded', 'maximize_unbounded',
    'minimize_bounded', 'maximize_bounded', 'minimize',
    'setup_logging',
]
