"""
异常定义

定义象棋变体规则内核的各种异常类型。
"""


class ChessVariantError(Exception):
    """
    规则内核基础异常

    所有规则内核相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class InvalidSquareError(ChessVariantError):
    """
    非法格子异常

    当坐标超出8x8棋盘范围时抛出。
    """

    def __init__(self, pos, reason: str = ""):
        message = f"无效的位置坐标: {pos}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_SQUARE")
        self.pos = pos
        self.reason = reason


class InvalidMoveError(ChessVariantError):
    """
    非法走法异常

    当尝试在棋盘上执行无法执行的走法时抛出。
    """

    def __init__(self, move_str: str, reason: str = ""):
        message = f"非法走法: {move_str}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_MOVE")
        self.move_str = move_str
        self.reason = reason


class InvalidPieceError(ChessVariantError):
    """
    非法棋子异常

    当棋子编码或棋子名称无法识别时抛出。
    """

    def __init__(self, value, reason: str = ""):
        message = f"无法识别的棋子: {value!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_PIECE")
        self.value = value
        self.reason = reason


class ConfigurationError(ChessVariantError):
    """
    配置错误异常

    当配置参数无效时抛出。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason

