# -- Optimization Module -- #

'''
Nelder-Mead simplex optimization.

Provides the simplex data model, the reflect/expand/contract/shrink
iteration loop and an optional per-axis bounds adapter.
'''

from neldermead.optimization.simplex import Point, Simplex
from neldermead.optimization.bounds import Bounds, BoundedObjective
from neldermead.optimization.nelder_mead import (
    OptimizationResult,
    run_nelder_mead,
    optimize,
    minimize_unbounded,
    maximize_unbounded,
    minimize_bounded,
    maximize_bounded,
    minimize,
)


__all__ = [
    'Point',
    'Simplex',
    'Bounds',
    'BoundedObjective',
    'OptimizationResult',
    'run_nelder_mead',
    'optimize',
    'minimize_unbounded',
    'maximize_unbounded',
    'minimize_bounded',
    'maximize_bounded',
    'minimize',
]
