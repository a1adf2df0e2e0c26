"""
逐维边界约束：把目标函数包装成同样签名的可调用对象，优化器本身不感知边界
"""
import sys
import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from neldermead.config.params import BoundsStrategy
from neldermead.errors import InvalidInputError
from neldermead.utils.validation import validate_bounds_arrays, validate_objective


@dataclass(frozen=True, eq=False)
class Bounds:
    """每一维的 [lower, upper] 区间"""
    lower: np.ndarray
    upper: np.ndarray

    def __post_init__(self):
        try:
            lower = np.array(self.lower, dtype=float)
            upper = np.array(self.upper, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"边界无法转换为实数向量: {e}") from e
        validate_bounds_arrays(lower, upper)
        lower.setflags(write=False)
        upper.setflags(write=False)
        object.__setattr__(self, 'lower', lower)
        object.__setattr__(self, 'upper', upper)

    @classmethod
    def none(cls, n: int) -> 'Bounds':
        """n 维的无约束边界（取浮点数的最大可表示范围）"""
        big = sys.float_info.max
        return cls(np.full(n, -big), np.full(n, big))

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[float, float]]) -> 'Bounds':
        """由 [(min, max), ...] 构造，每维一对"""
        try:
            pairs = list(pairs)
            malformed = any(len(pair) != 2 for pair in pairs)
        except TypeError as e:
            raise InvalidInputError(f"边界必须是 (min, max) 二元组的序列: {e}") from e
        if malformed:
            raise InvalidInputError("每一维的边界必须是 (min, max) 二元组")
        return cls([p[0] for p in pairs], [p[1] for p in pairs])

    @property
    def dimension(self) -> int:
        return self.lower.size

    def as_pairs(self) -> List[Tuple[float, float]]:
        return [(float(lo), float(hi)) for lo, hi in zip(self.lower, self.upper)]

    def clamp(self, x: np.ndarray) -> np.ndarray:
        return np.clip(np.asarray(x, dtype=float), self.lower, self.upper)

    def violation(self, x: np.ndarray) -> float:
        """各维越界距离之和，界内为 0"""
        x = np.asarray(x, dtype=float)
        below = np.maximum(self.lower - x, 0.0)
        above = np.maximum(x - self.upper, 0.0)
        return float(np.sum(below + above))

    def contains(self, x: np.ndarray) -> bool:
        x = np.asarray(x, dtype=float)
        return bool(np.all((x >= self.lower) & (x <= self.upper)))


class BoundedObjective:
    """
    带边界的目标函数包装器

    CLAMP: 把候选点截断到边界上再求值
    PENALTY: 越界时在截断点的函数值上加一个大的惩罚项 penalty * (1 + 越界距离)，
             最大化时改为减去惩罚项
    同一次优化中的每一次求值（包括构造初始单纯形）都使用同一种策略。
    """

    def __init__(self, objective: Callable[[np.ndarray], float], bounds: Bounds,
                 strategy: BoundsStrategy = BoundsStrategy.CLAMP, penalty: float = 1e10,
                 maximize: bool = False):
        validate_objective(objective)
        try:
            strategy = BoundsStrategy(strategy)
        except ValueError as e:
            raise InvalidInputError(f"未知的边界处理方式: {strategy!r}") from e
        if not penalty > 0:
            raise InvalidInputError(f"惩罚系数必须为正，实际为 {penalty!r}")

        self.objective = objective
        self.bounds = bounds
        self.strategy = strategy
        self.penalty = float(penalty)
        self.maximize = maximize

    def __call__(self, x: np.ndarray) -> float:
        clamped = self.bounds.clamp(x)
        value = self.objective(clamped)
        if self.strategy == BoundsStrategy.PENALTY:
            violation = self.bounds.violation(x)
            if violation > 0:
                penalty = self.penalty * (1.0 + violation)
                return value - penalty if self.maximize else value + penalty
        return value

    def project(self, x: np.ndarray) -> np.ndarray:
        """返回给调用方的点：CLAMP 下为截断后的点，PENALTY 下原样返回"""
        if self.strategy == BoundsStrategy.CLAMP:
            return self.bounds.clamp(x)
        return np.array(x, dtype=float)
