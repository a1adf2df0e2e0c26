"""
优化器的异常类型
"""


class InvalidInputError(ValueError):
    """输入参数不合法（在构造单纯形之前抛出）"""
