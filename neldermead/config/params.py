"""
统一管理Nelder-Mead算法的系数与运行参数
"""
from enum import StrEnum
from typing import Any, Dict, Optional
from dataclasses import dataclass, fields

from neldermead.errors import InvalidInputError
from neldermead.utils.validation import validate_params


class BoundsStrategy(StrEnum):
    """越界候选点的处理方式"""
    CLAMP = 'clamp'
    PENALTY = 'penalty'


class SimplexInit(StrEnum):
    """初始单纯形的构造方式"""
    AXIS = 'axis'
    RANDOM = 'random'


@dataclass
class Params:
    """
    单纯形变换系数

    reflection : 反射系数 α
    expansion : 扩展系数 γ
    contraction : 收缩系数 ρ
    shrink : 缩小系数 σ
    tolerance : 收敛容忍度 ε（单纯形各顶点目标函数值的极差）
    """

    reflection: float = 1.0
    expansion: float = 2.0
    contraction: float = 0.5
    shrink: float = 0.5
    tolerance: float = 1e-8

    @classmethod
    def default(cls) -> 'Params':
        """返回默认系数"""
        return cls()

    def validate(self) -> None:
        """检查系数是否合法，不合法时抛出InvalidInputError"""
        validate_params(self)

    def update_param(self, param_name: str, value: Any) -> None:
        """
        更新单个系数

        Args:
            param_name: 系数名称
            value: 新值
        """
        if param_name in _field_names(self):
            setattr(self, param_name, value)
        else:
            raise InvalidInputError(f"参数 '{param_name}' 不存在于Params中")

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in _field_names(self)}

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'Params':
        """由字典构造，未出现的键使用默认值"""
        unknown = set(values) - _field_names(cls)
        if unknown:
            raise InvalidInputError(f"未知的Params字段: {sorted(unknown)}")
        return cls(**values)


@dataclass
class SolverConfig:
    """
    单次优化运行的配置

    功能：
    1. 迭代预算与时间预算
    2. 提前终止条件
    3. 初始单纯形构造方式
    """

    # ========================
    # 一、预算
    # ========================

    max_iterations: int = 1000
    step_size: float = 1.0
    max_time: Optional[float] = None  # 秒，每次迭代开始时检查

    # ========================
    # 二、终止与收尾
    # ========================

    no_improve_break: Optional[int] = None  # 连续多少次迭代最优值无改进后停止
    final_centroid_check: bool = False  # 结束时比较最优顶点与质心

    # ========================
    # 三、初始单纯形
    # ========================

    simplex_init: SimplexInit = SimplexInit.AXIS
    seed: Optional[int] = None  # 仅RANDOM模式使用

    # ========================
    # 四、诊断
    # ========================

    record_history: bool = False

    def update_param(self, param_name: str, value: Any) -> None:
        if param_name in _field_names(self):
            setattr(self, param_name, value)
        else:
            raise InvalidInputError(f"参数 '{param_name}' 不存在于SolverConfig中")

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in _field_names(self)}


def _field_names(obj) -> set:
    return {f.name for f in fields(obj)}
