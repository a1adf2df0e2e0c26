"""
单纯形数据结构及其几何变换

Point 是不可变的顶点（坐标 + 目标函数值），Simplex 维护 n+1 个顶点并按得分升序排列。
得分（score）用于比较：最小化时等于目标函数值，最大化时取相反数，
非有限值（NaN/±inf）一律记为 +inf，即永远是最差的顶点。
"""
import math
import numpy as np
from dataclasses import dataclass
from typing import Callable, Iterator, List, Sequence

from neldermead.errors import InvalidInputError


@dataclass(frozen=True, eq=False)
class Point:
    """单纯形的一个顶点"""
    coords: np.ndarray
    value: float
    score: float

    def __post_init__(self):
        coords = np.array(self.coords, dtype=float)
        coords.setflags(write=False)
        object.__setattr__(self, 'coords', coords)

    @classmethod
    def evaluate(cls, objective: Callable[[np.ndarray], float], coords: np.ndarray,
                 sign: float = 1.0) -> 'Point':
        """
        计算目标函数值并生成顶点

        Args:
            objective: 目标函数
            coords: 坐标
            sign: 1.0 表示最小化，-1.0 表示最大化

        Returns:
            Point: 新顶点
        """
        coords = np.array(coords, dtype=float)
        # 传入副本，目标函数对参数的修改不会影响顶点
        value = float(objective(coords.copy()))
        return cls(coords, value, score_of(value, sign))

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)

    def __repr__(self) -> str:
        return f"Point(coords={self.coords.tolist()}, value={self.value})"


def score_of(value: float, sign: float = 1.0) -> float:
    if not math.isfinite(value):
        return math.inf
    return sign * value


class Simplex:
    """
    n 维空间中的 n+1 个顶点，始终按得分升序排列

    每次迭代原地替换最差顶点，或整体向最优顶点缩小。
    """

    def __init__(self, points: Sequence[Point]):
        points = list(points)
        if not points:
            raise InvalidInputError("单纯形至少需要一个顶点")
        dim = points[0].coords.size
        if len(points) != dim + 1:
            raise InvalidInputError(f"{dim} 维单纯形需要 {dim + 1} 个顶点，实际为 {len(points)}")
        if any(p.coords.size != dim for p in points):
            raise InvalidInputError("单纯形各顶点维度不一致")
        self._points: List[Point] = points
        self.sort()

    @classmethod
    def from_axis(cls, evaluate: Callable[[np.ndarray], Point], x0: np.ndarray,
                  step) -> 'Simplex':
        """
        初始点 + 沿每个坐标轴偏移step的n个点

        step 可以是标量，也可以是逐维的偏移量（允许为负）
        """
        steps = np.broadcast_to(np.asarray(step, dtype=float), x0.shape)
        points = [evaluate(x0)]
        for i in range(x0.size):
            x = np.copy(x0)
            x[i] = x[i] + steps[i]
            points.append(evaluate(x))
        return cls(points)

    @classmethod
    def from_random(cls, evaluate: Callable[[np.ndarray], Point], x0: np.ndarray,
                    step: float, rng: np.random.Generator) -> 'Simplex':
        """n+1 个顶点，每个坐标在初始点附近 [-step, step) 内均匀扰动"""
        points = [evaluate(x0 + rng.uniform(-step, step, size=x0.size))
                  for _ in range(x0.size + 1)]
        return cls(points)

    # --- 访问 ---

    @property
    def dimension(self) -> int:
        return self._points[0].coords.size

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    @property
    def best(self) -> Point:
        return self._points[0]

    @property
    def worst(self) -> Point:
        return self._points[-1]

    @property
    def second_worst(self) -> Point:
        return self._points[-2]

    def scores(self) -> np.ndarray:
        return np.array([p.score for p in self._points])

    def spread(self) -> float:
        """各顶点得分的极差；存在非有限值时为 inf"""
        scores = self.scores()
        if not np.all(np.isfinite(scores)):
            return math.inf
        return float(scores.max() - scores.min())

    # --- 变换 ---

    def sort(self) -> None:
        # 稳定排序，得分相同的顶点保持原有顺序
        self._points.sort(key=lambda p: p.score)

    def centroid(self) -> np.ndarray:
        """除最差顶点外其余顶点的质心"""
        return np.mean([p.coords for p in self._points[:-1]], axis=0)

    def reflect(self, centroid: np.ndarray, alpha: float) -> np.ndarray:
        return centroid + alpha * (centroid - self.worst.coords)

    @staticmethod
    def expand(centroid: np.ndarray, reflected: np.ndarray, gamma: float) -> np.ndarray:
        return centroid + gamma * (reflected - centroid)

    def contract(self, centroid: np.ndarray, rho: float) -> np.ndarray:
        return centroid + rho * (self.worst.coords - centroid)

    def replace_worst(self, point: Point) -> None:
        if point.coords.size != self.dimension:
            raise InvalidInputError(f"顶点维度 {point.coords.size} 与单纯形维度 {self.dimension} 不一致")
        self._points[-1] = point
        self.sort()

    def shrink(self, sigma: float, evaluate: Callable[[np.ndarray], Point]) -> None:
        """除最优顶点外，所有顶点向最优顶点缩小：best + σ(v − best)"""
        best = self.best
        shrunk = [best]
        for p in self._points[1:]:
            shrunk.append(evaluate(best.coords + sigma * (p.coords - best.coords)))
        self._points = shrunk
        self.sort()
