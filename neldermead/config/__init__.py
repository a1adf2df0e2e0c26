"""
配置模块
"""

from .params import Params, SolverConfig, BoundsStrategy, SimplexInit

__all__ = ['Params', 'SolverConfig', 'BoundsStrategy', 'SimplexInit']
