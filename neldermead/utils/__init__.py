"""
Utility modules for the project
"""

from .logging_setup import setup_logging
from .validation import (
    validate_objective, validate_initial_point, validate_step_size,
    validate_max_iterations, validate_params, validate_solver_config,
    validate_bounds_arrays
)
