"""
该模块实现优化器的输入检查，所有检查都在构造单纯形之前完成
"""
import math
import numpy as np
from typing import Any, Callable, Sequence

from neldermead.errors import InvalidInputError

PARAMS_FIELDS = ('reflection', 'expansion', 'contraction', 'shrink', 'tolerance')


def validate_objective(objective: Callable[..., float]) -> None:
    if not callable(objective):
        raise InvalidInputError(f"目标函数必须可调用，实际类型: {type(objective).__name__}")


def validate_initial_point(initial_point: Sequence[float]) -> np.ndarray:
    """
    检查初始点并转换为一维浮点数组

    Args:
        initial_point: 初始猜测

    Returns:
        np.ndarray: 初始点的副本，dtype为float
    """
    try:
        x0 = np.array(initial_point, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"初始点无法转换为实数向量: {e}") from e

    if x0.ndim != 1:
        raise InvalidInputError(f"初始点必须是一维向量，实际维度: {x0.ndim}")
    if x0.size == 0:
        raise InvalidInputError("初始点不能为空")
    if not np.all(np.isfinite(x0)):
        raise InvalidInputError(f"初始点包含非有限值: {x0}")
    return x0


def validate_step_size(step_size: float) -> float:
    try:
        step = float(step_size)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"步长必须是实数: {step_size!r}") from e
    if not math.isfinite(step) or step <= 0:
        raise InvalidInputError(f"步长必须为正的有限数，实际为 {step_size}")
    return step


def validate_max_iterations(max_iterations: Any) -> int:
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, (int, np.integer)):
        raise InvalidInputError(f"最大迭代次数必须是整数，实际为 {max_iterations!r}")
    if max_iterations < 0:
        raise InvalidInputError(f"最大迭代次数不能为负，实际为 {max_iterations}")
    return int(max_iterations)


def validate_params(params) -> None:
    """
    检查单纯形系数：反射/扩展/收缩/缩小系数必须为正，容忍度必须非负
    """
    missing = [name for name in PARAMS_FIELDS if not hasattr(params, name)]
    if missing:
        raise InvalidInputError(f"需要Params对象，实际类型: {type(params).__name__}")

    for name in ('reflection', 'expansion', 'contraction', 'shrink'):
        value = getattr(params, name)
        if not _is_real(value) or not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"系数 {name} 必须为正的有限数，实际为 {value!r}")

    tolerance = params.tolerance
    if not _is_real(tolerance) or math.isnan(tolerance) or tolerance < 0:
        raise InvalidInputError(f"容忍度必须非负，实际为 {tolerance!r}")


def validate_solver_config(config) -> None:
    validate_max_iterations(config.max_iterations)
    validate_step_size(config.step_size)

    if config.max_time is not None:
        if not _is_real(config.max_time) or math.isnan(config.max_time) or config.max_time < 0:
            raise InvalidInputError(f"时间预算必须非负，实际为 {config.max_time!r}")

    if config.no_improve_break is not None:
        if isinstance(config.no_improve_break, bool) or not isinstance(config.no_improve_break, int) \
                or config.no_improve_break < 1:
            raise InvalidInputError(f"no_improve_break必须是正整数，实际为 {config.no_improve_break!r}")

    if config.seed is not None:
        if isinstance(config.seed, bool) or not isinstance(config.seed, (int, np.integer)) \
                or config.seed < 0:
            raise InvalidInputError(f"随机种子必须是非负整数，实际为 {config.seed!r}")


def validate_bounds_arrays(lower: np.ndarray, upper: np.ndarray) -> None:
    if lower.ndim != 1 or upper.ndim != 1:
        raise InvalidInputError("边界必须是一维向量")
    if lower.shape != upper.shape:
        raise InvalidInputError(f"上下界维度不匹配: {lower.size} != {upper.size}")
    if np.any(np.isnan(lower)) or np.any(np.isnan(upper)):
        raise InvalidInputError("边界不能包含NaN")
    bad = np.nonzero(lower > upper)[0]
    if bad.size:
        raise InvalidInputError(f"第 {bad.tolist()} 维的下界大于上界")


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)
