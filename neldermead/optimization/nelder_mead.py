import logging
import time
import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from neldermead.config.params import BoundsStrategy, Params, SimplexInit, SolverConfig
from neldermead.errors import InvalidInputError
from neldermead.optimization.bounds import BoundedObjective, Bounds
from neldermead.optimization.simplex import Point, Simplex
from neldermead.utils.validation import (
    validate_initial_point, validate_objective, validate_params, validate_solver_config
)

logger = logging.getLogger(__name__)

Objective = Callable[[np.ndarray], float]
BoundsLike = Union[Bounds, Sequence[Tuple[float, float]]]

HISTORY_COLUMNS = ['iteration', 'operation', 'best_value', 'spread', 'n_evaluations']


@dataclass
class OptimizationResult:
    """一次Nelder-Mead运行的结果"""
    x: np.ndarray
    fun: float
    iterations: int
    n_evaluations: int
    converged: bool
    message: str
    history: List[Dict[str, Any]] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        """逐次迭代记录（需要 record_history=True）"""
        return pd.DataFrame(self.history, columns=HISTORY_COLUMNS)


def run_nelder_mead(objective: Objective, initial_point: Sequence[float],
                    params: Optional[Params] = None,
                    config: Optional[SolverConfig] = None,
                    maximize: bool = False,
                    bounds: Optional[BoundsLike] = None,
                    bounds_strategy: BoundsStrategy = BoundsStrategy.CLAMP,
                    penalty: float = 1e10,
                    callback: Optional[Callable[[int, Simplex], None]] = None) -> OptimizationResult:
    """
    Nelder-Mead单纯形法，最小化（或最大化）目标函数

    Parameters:
    objective : callable
        目标函数，接收一个长度为n的向量并返回一个标量
    initial_point : array_like
        初始点，n >= 1
    params : Params
        反射/扩展/收缩/缩小系数与收敛容忍度，None时使用 Params.default()
    config : SolverConfig
        迭代预算、步长、提前终止条件等，None时使用默认配置
    maximize : bool
        True时最大化目标函数
    bounds : Bounds or list of (min, max)
        逐维边界，None表示无约束
    bounds_strategy : BoundsStrategy
        越界处理方式（截断或惩罚）
    penalty : float
        惩罚策略的惩罚系数
    callback : callable
        每次迭代结束后调用 callback(iteration, simplex)

    Returns:
    OptimizationResult
        最优点、目标函数值及运行统计
    """
    params = params if params is not None else Params.default()
    config = config if config is not None else SolverConfig()

    validate_objective(objective)
    x0 = validate_initial_point(initial_point)
    validate_params(params)
    validate_solver_config(config)
    try:
        simplex_init = SimplexInit(config.simplex_init)
    except ValueError as e:
        raise InvalidInputError(f"未知的初始单纯形构造方式: {config.simplex_init!r}") from e

    adapter = None
    clamp_vertices = False
    steps = config.step_size
    if bounds is not None:
        if not isinstance(bounds, Bounds):
            bounds = Bounds.from_pairs(bounds)
        if bounds.dimension != x0.size:
            raise InvalidInputError(f"边界维度 {bounds.dimension} 与初始点维度 {x0.size} 不一致")
        adapter = BoundedObjective(objective, bounds, bounds_strategy, penalty, maximize=maximize)
        objective = adapter
        if adapter.strategy == BoundsStrategy.CLAMP:
            # 顶点坐标本身保持在边界内，初始点先投影到边界上
            clamp_vertices = True
            x0 = bounds.clamp(x0)
            steps = _inward_steps(x0, config.step_size, bounds)

    sign = -1.0 if maximize else 1.0
    n_evaluations = 0

    def evaluate(coords: np.ndarray) -> Point:
        nonlocal n_evaluations
        n_evaluations += 1
        if clamp_vertices:
            coords = adapter.bounds.clamp(coords)
        return Point.evaluate(objective, coords, sign)

    def report(point: Point) -> np.ndarray:
        x = np.array(point.coords)
        return adapter.project(x) if adapter is not None else x

    if config.max_iterations == 0:
        start = evaluate(x0)
        logger.info(f"Nelder-Mead: zero iteration budget, returning initial point (f = {start.value:.6g})")
        return OptimizationResult(
            x=report(start),
            fun=start.value,
            iterations=0,
            n_evaluations=n_evaluations,
            converged=False,
            message='Iteration budget is zero, initial point returned',
        )

    # Initial simplex
    if simplex_init == SimplexInit.RANDOM:
        simplex = Simplex.from_random(evaluate, x0, config.step_size, np.random.default_rng(config.seed))
    else:
        simplex = Simplex.from_axis(evaluate, x0, steps)

    deadline = time.monotonic() + config.max_time if config.max_time is not None else None
    history = []
    iterations = 0
    converged = False
    message = f'Iteration budget of {config.max_iterations} exhausted'
    prev_best = simplex.best.score
    no_improve = 0

    while iterations < config.max_iterations:
        if deadline is not None and time.monotonic() >= deadline:
            message = f'Time budget of {config.max_time}s exhausted'
            break
        iterations += 1

        operation = _step(simplex, params, evaluate)
        best = simplex.best
        spread = simplex.spread()

        logger.debug(f"  iter {iterations}: {operation}, best = {best.value:.6g}, spread = {spread:.3g}")
        if config.record_history:
            history.append({
                'iteration': iterations,
                'operation': operation,
                'best_value': best.value,
                'spread': spread,
                'n_evaluations': n_evaluations,
            })
        if callback is not None:
            callback(iterations, simplex)

        # Convergence
        if spread < params.tolerance:
            converged = True
            message = f'Converged: spread {spread:.3g} below tolerance {params.tolerance:.3g}'
            break

        if config.no_improve_break is not None:
            if best.score < prev_best - params.tolerance:
                no_improve = 0
                prev_best = best.score
            else:
                no_improve += 1
            if no_improve >= config.no_improve_break:
                message = f'No improvement in {no_improve} iterations'
                break

    best = simplex.best
    if config.final_centroid_check:
        center = evaluate(simplex.centroid())
        if center.score < best.score:
            logger.debug(f"  centroid improves on best vertex: {center.value:.6g} < {best.value:.6g}")
            best = center

    logger.info(f"Nelder-Mead finished after {iterations} iterations, {n_evaluations} evaluations: "
                f"{message}; best value = {best.value:.6g}")
    if not best.is_finite:
        logger.warning("Nelder-Mead: no vertex produced a finite objective value")

    return OptimizationResult(
        x=report(best),
        fun=best.value,
        iterations=iterations,
        n_evaluations=n_evaluations,
        converged=converged,
        message=message,
        history=history,
    )


def _inward_steps(x0: np.ndarray, step: float, bounds: Bounds) -> np.ndarray:
    """逐维初始偏移：正向越过上界时改为反向，区间比步长还窄时取空间较大的一侧"""
    room_up = bounds.upper - x0
    room_down = x0 - bounds.lower
    flip = (x0 + step > bounds.upper) & (room_down > room_up)
    return np.where(flip, -step, step)


def _step(simplex: Simplex, params: Params, evaluate: Callable[[np.ndarray], Point]) -> str:
    """对单纯形执行一次迭代，返回所采用的操作名称"""
    # Centroid
    centroid = simplex.centroid()

    # Reflection
    reflected = evaluate(simplex.reflect(centroid, params.reflection))
    if simplex.best.score <= reflected.score < simplex.second_worst.score:
        simplex.replace_worst(reflected)
        return 'reflect'

    # Expansion
    if reflected.score < simplex.best.score:
        expanded = evaluate(Simplex.expand(centroid, reflected.coords, params.expansion))
        if expanded.score < reflected.score:
            simplex.replace_worst(expanded)
            return 'expand'
        simplex.replace_worst(reflected)
        return 'reflect'

    # Contraction
    contracted = evaluate(simplex.contract(centroid, params.contraction))
    if contracted.score < simplex.worst.score:
        simplex.replace_worst(contracted)
        return 'contract'

    # Reduction
    simplex.shrink(params.shrink, evaluate)
    return 'shrink'


def optimize(objective: Objective, initial_point: Sequence[float], step_size: float,
             params: Optional[Params] = None, max_iterations: int = 1000,
             maximize: bool = False) -> Tuple[np.ndarray, float]:
    """返回 (最优点, 目标函数值)"""
    config = SolverConfig(max_iterations=max_iterations, step_size=step_size)
    result = run_nelder_mead(objective, initial_point, params, config, maximize=maximize)
    return result.x, result.fun


def minimize_unbounded(objective: Objective, initial_point: Sequence[float], step_size: float,
                       params: Optional[Params] = None,
                       max_iterations: int = 1000) -> Tuple[np.ndarray, float]:
    return optimize(objective, initial_point, step_size, params, max_iterations, maximize=False)


def maximize_unbounded(objective: Objective, initial_point: Sequence[float], step_size: float,
                       params: Optional[Params] = None,
                       max_iterations: int = 1000) -> Tuple[np.ndarray, float]:
    return optimize(objective, initial_point, step_size, params, max_iterations, maximize=True)


def minimize_bounded(objective: Objective, initial_point: Sequence[float], step_size: float,
                     params: Optional[Params], max_iterations: int, bounds: BoundsLike,
                     strategy: BoundsStrategy = BoundsStrategy.CLAMP) -> Tuple[np.ndarray, float]:
    """
    带逐维边界的最小化

    CLAMP 策略下返回的点总在边界内，其函数值即截断点处的目标函数值。
    """
    config = SolverConfig(max_iterations=max_iterations, step_size=step_size)
    result = run_nelder_mead(objective, initial_point, params, config,
                             bounds=bounds, bounds_strategy=strategy)
    return result.x, result.fun


def maximize_bounded(objective: Objective, initial_point: Sequence[float], step_size: float,
                     params: Optional[Params], max_iterations: int, bounds: BoundsLike,
                     strategy: BoundsStrategy = BoundsStrategy.CLAMP) -> Tuple[np.ndarray, float]:
    config = SolverConfig(max_iterations=max_iterations, step_size=step_size)
    result = run_nelder_mead(objective, initial_point, params, config, maximize=True,
                             bounds=bounds, bounds_strategy=strategy)
    return result.x, result.fun


def minimize(objective: Objective, initial_point: Sequence[float], step_size: float,
             params: Optional[Params], bounds: Optional[BoundsLike],
             max_iterations: int) -> Tuple[np.ndarray, float]:
    """
    通用入口：bounds 为 None 时等价于 minimize_unbounded，否则按截断策略处理边界
    """
    if bounds is None:
        return minimize_unbounded(objective, initial_point, step_size, params, max_iterations)
    return minimize_bounded(objective, initial_point, step_size, params, max_iterations, bounds)
