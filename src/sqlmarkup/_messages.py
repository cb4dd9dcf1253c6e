"""エラーメッセージ定義."""

from __future__ import annotations

from typing import Any

from sqlmarkup import config

_MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        "invalid_label": "SQLマークアップのラベルが不正です: {label!r}",
        "invalid_placeholder": "名前付きプレースホルダが不正です: {placeholder!r}",
        "invalid_param_type": "パラメータ型が不正です: {param_type!r}",
        "invalid_bind_value": "バインド値はスカラーまたは None である必要があります: {type_name}",
        "mixed_key_shape": "整数キーと文字列キーが混在したバインド値は指定できません",
        "mixed_bind_shape": "Bind に位置指定と名前付きの値を混在させることはできません",
        "named_push_to_indexed": (
            "Bind の位置指定の値の後に名前付きの値を追加することはできません"
        ),
        "indexed_push_to_named": (
            "Bind の名前付きの値の後に位置指定の値を追加することはできません"
        ),
        "named_bind_in_list": (
            "バインド値リスト内の Bind は位置指定である必要があります（名前付きが指定されました）"
        ),
        "multidimensional_bind": "複数の値を持つ Bind はこの位置に指定できません: {key!r}",
        "empty_in_list": "IN句のバインド値が空です",
        "mixed_placeholder_style": "? と名前付きプレースホルダを同じSQLで使用することはできません",
        "named_bind_for_positional": "? プレースホルダに名前付きのバインド値は指定できません",
        "bind_arity_mismatch": (
            "プレースホルダの数 ({placeholders}) とバインド値の数 ({values}) が一致しません"
        ),
        "unbound_placeholder": "プレースホルダに値がバインドされていません: {placeholder!r}",
        "reserved_placeholder": (
            "プレースホルダ名は展開用に予約されています"
            "（:__ で始まる名前、:_、末尾が _{{n}}__ の名前）: {placeholder!r}"
        ),
    },
    "en": {
        "invalid_label": "Invalid SQL-markup label: {label!r}",
        "invalid_placeholder": "Invalid SQL named placeholder: {placeholder!r}",
        "invalid_param_type": "Invalid parameter type: {param_type!r}",
        "invalid_bind_value": "Bind value must be a scalar or None, {type_name} given",
        "mixed_key_shape": "Bind values cannot mix integer and string keys",
        "mixed_bind_shape": "Bind cannot mix positional and named values",
        "named_push_to_indexed": "Named values cannot follow positional values in a Bind",
        "indexed_push_to_named": "Positional values cannot follow named values in a Bind",
        "named_bind_in_list": (
            "Bind inside a bind value list must be positional, named Bind given"
        ),
        "multidimensional_bind": "Bind at {key!r} cannot carry multiple values",
        "empty_in_list": "IN-list bind value cannot be empty",
        "mixed_placeholder_style": (
            "Cannot use both question mark and named placeholders in one SQL"
        ),
        "named_bind_for_positional": "Question mark placeholders cannot take named bind values",
        "bind_arity_mismatch": (
            "Placeholder count ({placeholders}) does not match bind value count ({values})"
        ),
        "unbound_placeholder": "No bind value for placeholder: {placeholder!r}",
        "reserved_placeholder": (
            "Placeholder name is reserved for expansion keys"
            " (starts with :__, is :_, or ends with _{{n}}__): {placeholder!r}"
        ),
    },
}


def format_message(key: str, /, *, sql: str | None = None, **params: Any) -> str:
    """エラーメッセージを組み立てる.

    Args:
        key: メッセージキー
        sql: エラー対象のSQLテンプレート（``config.ERROR_INCLUDE_SQL`` 有効時のみ付与）
        **params: メッセージ埋め込み値

    Returns:
        ``config.ERROR_MESSAGE_LANGUAGE`` に応じたメッセージ

    """
    messages = _MESSAGES.get(config.ERROR_MESSAGE_LANGUAGE, _MESSAGES["ja"])
    template = messages.get(key, key)
    msg = template.format(**params)
    if sql is not None and config.ERROR_INCLUDE_SQL:
        msg = f"{msg} sql='{sql.strip()}'"
    return msg
