"""Bind: 型タグ付きバインド値グループ."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlmarkup._messages import format_message
from sqlmarkup.exceptions import (
    InvalidBindValueError,
    MixedBindShapeError,
    ReservedPlaceholderError,
)
from sqlmarkup.param_type import ParamType

NAMED_PLACEHOLDER_PATTERN = re.compile(r"^:[a-zA-Z0-9_]+$")

# 展開で生成するキー（:__{n}__, :__{n}_{j}__, :name_{j}__）と衝突しうる名前
RESERVED_PLACEHOLDER_PATTERN = re.compile(r"^:_(?:_|$)|_\d+__$")

SCALAR_TYPES: tuple[type, ...] = (str, int, float, bool, bytes, bytearray)
"""バインド可能なスカラー型（None も可）."""


@dataclass(frozen=True)
class BoundValue:
    """型タグ付きのバインド値."""

    value: Any
    """スカラー値、または IN句用のスカラーのリスト."""

    param_type: ParamType
    """パラメータ型（IN句の場合は全要素で共通）."""

    @property
    def is_in_list(self) -> bool:
        """IN句用のリスト値か."""
        return isinstance(self.value, list)


def assert_bind_value(value: Any) -> None:
    """値がスカラーまたは None であることを検証する.

    Raises:
        InvalidBindValueError: スカラー/None 以外の場合

    """
    if value is not None and not isinstance(value, SCALAR_TYPES):
        msg = format_message("invalid_bind_value", type_name=type(value).__name__)
        raise InvalidBindValueError(msg)


def to_in_list(values: Iterable[Any] | dict[Any, Any]) -> list[Any]:
    """IN句用の値をリストに詰め直し、各要素を検証する.

    dict の場合はキーを捨てて値のみを順に取り出す。
    """
    items = list(values.values()) if isinstance(values, dict) else list(values)
    for item in items:
        assert_bind_value(item)
    return items


def assert_named_placeholder(placeholder: Any) -> None:
    """名前付きプレースホルダ（``:name``）の形式を検証する.

    Raises:
        InvalidBindValueError: 形式が不正な場合
        ReservedPlaceholderError: 展開用の予約名の場合

    """
    if not isinstance(placeholder, str) or not NAMED_PLACEHOLDER_PATTERN.match(placeholder):
        msg = format_message("invalid_placeholder", placeholder=placeholder)
        raise InvalidBindValueError(msg)
    assert_not_reserved(placeholder)


def assert_not_reserved(placeholder: str, *, sql: str | None = None) -> None:
    """プレースホルダ名が展開用の予約名でないことを検証する.

    予約名は ``:__`` で始まる名前、``:_``、末尾が ``_{n}__`` の名前。
    これらは ``?`` や IN句の展開で生成するキーと衝突しうる。

    Raises:
        ReservedPlaceholderError: 予約名の場合

    """
    if RESERVED_PLACEHOLDER_PATTERN.search(placeholder):
        msg = format_message("reserved_placeholder", sql=sql, placeholder=placeholder)
        raise ReservedPlaceholderError(msg)


class Bind:
    """1つの型タグでまとめたバインド値グループ.

    ファクトリメソッドで生成する。位置指定の値（スカラー、IN句リスト）と
    名前付きの値（``{":name": value}``）はどちらか一方のみ保持できる。

    Examples:
        >>> len(Bind.as_int(10, 20))
        2
        >>> Bind.as_int([18, 24, 36]).values[0].value  # IN句
        [18, 24, 36]
        >>> sorted(Bind.as_str({":name": "chopin", ":tags": ["a", "b"]}).values)
        [':name', ':tags']

    """

    def __init__(self, values: Iterable[Any], param_type: ParamType | str) -> None:
        """初期化.

        Args:
            values: バインド値の並び
            param_type: 全値に共通のパラメータ型

        Raises:
            MixedBindShapeError: 位置指定と名前付きが混在する場合
            InvalidBindValueError: 値やプレースホルダ名が不正な場合

        """
        self._param_type = ParamType.of(param_type)
        positional: list[BoundValue] = []
        named: dict[str, BoundValue] = {}
        is_named = False

        for value in values:
            if isinstance(value, dict):
                if not all(isinstance(key, str) for key in value):
                    raise MixedBindShapeError(format_message("mixed_bind_shape"))
                if not is_named and positional:
                    raise MixedBindShapeError(format_message("named_push_to_indexed"))
                is_named = True
                for key, val in value.items():
                    assert_named_placeholder(key)
                    if isinstance(val, list | tuple | dict):
                        val = to_in_list(val)
                    else:
                        assert_bind_value(val)
                    named[key] = BoundValue(val, self._param_type)
            elif is_named:
                raise MixedBindShapeError(format_message("indexed_push_to_named"))
            elif isinstance(value, list | tuple):
                positional.append(BoundValue(to_in_list(value), self._param_type))
            else:
                assert_bind_value(value)
                positional.append(BoundValue(value, self._param_type))

        self._values: list[BoundValue] | dict[str, BoundValue] = named if is_named else positional

    @classmethod
    def as_int(cls, *values: Any) -> Bind:
        """整数型としてバインドする."""
        return cls(values, ParamType.INT)

    @classmethod
    def as_str(cls, *values: Any) -> Bind:
        """文字列型としてバインドする."""
        return cls(values, ParamType.STR)

    @classmethod
    def as_null(cls, value: Any = None, *values: Any) -> Bind:
        """NULL 型としてバインドする（引数なしの場合は None を1つ）."""
        return cls((value, *values), ParamType.NULL)

    @classmethod
    def as_bool(cls, *values: Any) -> Bind:
        """真偽値型としてバインドする."""
        return cls(values, ParamType.BOOL)

    @classmethod
    def as_lob(cls, *values: Any) -> Bind:
        """ラージオブジェクト型としてバインドする."""
        return cls(values, ParamType.LOB)

    @property
    def param_type(self) -> ParamType:
        """パラメータ型."""
        return self._param_type

    @property
    def is_named(self) -> bool:
        """名前付きの値を保持しているか."""
        return isinstance(self._values, dict)

    @property
    def values(self) -> list[BoundValue] | dict[str, BoundValue]:
        """正規化済みのバインド値（コピー）."""
        if isinstance(self._values, dict):
            return dict(self._values)
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bind):
            return NotImplemented
        return self._param_type is other._param_type and self._values == other._values

    def __repr__(self) -> str:
        return f"Bind({self._param_type.name}, {self._values!r})"
