"""バインド値の正規化.

呼び出し側が渡す様々な形（スカラー、リスト、辞書、Bind、遅延評価関数）の
バインド値を、位置指定リストまたは名前付き辞書のどちらか一方の
正規形（``CanonicalBind``）に変換する。
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeAlias

from sqlmarkup._messages import format_message
from sqlmarkup.bind import (
    Bind,
    BoundValue,
    assert_bind_value,
    assert_not_reserved,
    to_in_list,
)
from sqlmarkup.exceptions import (
    EmptyInListError,
    InvalidBindShapeError,
    MixedKeyShapeError,
    MultidimensionalBindError,
)
from sqlmarkup.param_type import ParamType, detect_param_type

CanonicalBind: TypeAlias = list[BoundValue] | dict[str, BoundValue]
"""正規化済みバインド値. None はラベル削除（Suppressed）を表す."""


class BindNormalizer:
    """バインド値を正規形に変換する."""

    def __init__(self, *, detect_value_type: bool = False) -> None:
        self.detect_value_type = detect_value_type

    def normalize(self, bind: Any) -> CanonicalBind | None:
        """バインド値を正規化する.

        変換規則:
        - None → None（ラベルを出力から削除する指定）
        - Bind → Bind が保持する正規形
        - 引数なしの callable → 呼び出した結果を正規化
        - スカラー → 1要素の位置指定リスト
        - list/tuple → 位置指定、文字列キーの dict → 名前付き

        Args:
            bind: バインド値

        Returns:
            正規化済みバインド値、または None

        Raises:
            MixedKeyShapeError: 整数キーと文字列キーが混在する場合
            InvalidBindShapeError: Bind の配置が不正な場合
            MultidimensionalBindError: 複数値の Bind を名前付きキーに指定した場合、
                または複数の名前を持つ Bind を位置指定の要素に指定した場合
            EmptyInListError: IN句リストが空の場合
            InvalidBindValueError: スカラー/None 以外の値を含む場合
            ReservedPlaceholderError: 展開用の予約名をキーに使った場合

        """
        if bind is None:
            return None
        if isinstance(bind, Bind):
            return bind.values
        if callable(bind):
            return self.normalize(bind())
        if not isinstance(bind, list | tuple | dict):
            assert_bind_value(bind)
            return [BoundValue(bind, self._detect(bind))]
        if not bind:
            return []

        is_named, items = self._split_items(bind)
        positional: list[BoundValue] = []
        named: dict[str, BoundValue] = {}

        for key, value in items:
            if is_named:
                assert_not_reserved(key)
            if isinstance(value, Bind):
                values = value.values
                if not values:
                    entry = BoundValue([], value.param_type)
                elif isinstance(values, dict):
                    # [Bind.as_int({":limit": 5, ":offset": 30})] のように
                    # 名前付き Bind を1要素リストで包んだ場合のみ許容する
                    if not is_named and len(bind) == 1:
                        return values
                    if len(values) > 1:
                        raise MultidimensionalBindError(
                            format_message("multidimensional_bind", key=key)
                        )
                    raise InvalidBindShapeError(format_message("named_bind_in_list"))
                elif not is_named:
                    positional.extend(values)
                    continue
                elif len(values) > 1:
                    raise MultidimensionalBindError(
                        format_message("multidimensional_bind", key=key)
                    )
                else:
                    entry = values[0]
            elif isinstance(value, list | tuple | dict):
                if not value:
                    raise EmptyInListError(format_message("empty_in_list"))
                in_list = to_in_list(value)
                entry = BoundValue(in_list, self._detect(in_list[0]))
            else:
                assert_bind_value(value)
                entry = BoundValue(value, self._detect(value))

            if is_named:
                named[key] = entry
            else:
                positional.append(entry)

        return named if is_named else positional

    def _detect(self, value: Any) -> ParamType:
        return detect_param_type(value, detect=self.detect_value_type)

    @staticmethod
    def _split_items(
        bind: list[Any] | tuple[Any, ...] | dict[Any, Any],
    ) -> tuple[bool, Iterable[tuple[Any, Any]]]:
        """コンテナのキー形状を判定し、(名前付きか, (キー, 値) の並び) を返す."""
        if not isinstance(bind, dict):
            return False, enumerate(bind)
        keys = list(bind)
        if all(isinstance(key, str) for key in keys):
            return True, bind.items()
        if keys == list(range(len(keys))):
            return False, bind.items()
        raise MixedKeyShapeError(format_message("mixed_key_shape"))
