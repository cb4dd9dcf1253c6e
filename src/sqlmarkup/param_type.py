"""ParamType enum: ドライバへ渡すパラメータ型タグ."""

from __future__ import annotations

from enum import Enum
from typing import Any

from sqlmarkup._messages import format_message
from sqlmarkup.exceptions import InvalidBindValueError


class ParamType(Enum):
    """バインド値に付与するパラメータ型.

    外部のステートメントバインダが型指定付きでバインドする際に参照する。
    DB-API 2.0 ドライバでは値そのものだけが渡され、型タグは参考情報となる。
    """

    STR = "string"
    INT = "int"
    BOOL = "bool"
    NULL = "null"
    LOB = "lob"

    @classmethod
    def of(cls, param_type: ParamType | str) -> ParamType:
        """型タグを ParamType に変換する.

        Raises:
            InvalidBindValueError: 未知の型タグの場合

        """
        if isinstance(param_type, ParamType):
            return param_type
        try:
            return cls(param_type)
        except ValueError:
            msg = format_message("invalid_param_type", param_type=param_type)
            raise InvalidBindValueError(msg) from None


def detect_param_type(value: Any, *, detect: bool = False) -> ParamType:
    """値のパラメータ型を判定する.

    Args:
        value: バインド値
        detect: False の場合は常に ``ParamType.STR``

    Returns:
        パラメータ型

    """
    if not detect:
        return ParamType.STR
    # bool は int のサブクラスなので先に判定する
    if isinstance(value, bool):
        return ParamType.BOOL
    if isinstance(value, int):
        return ParamType.INT
    if value is None:
        return ParamType.NULL
    if isinstance(value, bytes | bytearray):
        return ParamType.LOB
    return ParamType.STR
