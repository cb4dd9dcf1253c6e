"""compile_sql 便利関数."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlmarkup.builder import Builder, CompiledSQL


def compile_sql(
    sql: str,
    bind: Any = (),
    *,
    labels: Mapping[str, Any] | None = None,
    detect_value_type: bool = False,
) -> CompiledSQL:
    """SQLテンプレートをコンパイルする便利関数.

    Args:
        sql: SQLテンプレート
        bind: トップレベルのバインド値
        labels: ラベル名 → バインド値（None はラベル削除）
        detect_value_type: 値から型を判定するか

    Returns:
        コンパイル結果

    """
    builder = Builder(detect_value_type=detect_value_type)
    for label, label_bind in (labels or {}).items():
        builder.register(label, label_bind)
    return builder.compile(sql, bind)
