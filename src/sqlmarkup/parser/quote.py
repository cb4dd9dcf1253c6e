"""引用符で囲まれたリテラルのマスク処理."""

from __future__ import annotations

import re

# 2種類の引用符を1回のマッチで処理する。
# 引用符ごとに別々に置換すると、次のようなSQLで誤検出が起きる:
#   where name = 'abc"def' and remark like "%defk"
# ダブルクォートを先に置換すると 'abc から "%defk" の " までが1つの
# リテラルとして扱われてしまう。
MIXED_QUOTES_PATTERN = re.compile(
    r'"[^"\\]*(?:\\.[^"\\]*)*"'  # "string" (backslash escape)
    r"|'[^'\\]*(?:\\.[^'\\]*)*'",  # 'string' (backslash escape)
    re.DOTALL,
)

# 片方の引用符しか含まないSQLはこちらを使う（交互マッチより速い）
DOUBLE_QUOTES_PATTERN = re.compile(r'"[^"\\]*(?:\\.[^"\\]*)*"', re.DOTALL)
SINGLE_QUOTES_PATTERN = re.compile(r"'[^'\\]*(?:\\.[^'\\]*)*'", re.DOTALL)


def _to_space(match: re.Match[str]) -> str:
    return " " * len(match.group(0))


def mask_quotes(sql: str) -> str:
    """引用符で囲まれたリテラルを同じ長さの空白に置き換える.

    リテラル内の ``?`` や ``:name`` をプレースホルダとして誤検出しないための
    前処理。文字数を変えないため、マスク後の位置をそのまま元のSQLに適用できる。

    Args:
        sql: SQLテンプレート

    Returns:
        マスク済みSQL（``len(result) == len(sql)``）

    Examples:
        >>> mask_quotes("where name = 'a?b' and id = ?")
        'where name =       and id = ?'

    """
    has_double = '"' in sql
    has_single = "'" in sql
    if has_double and has_single:
        return MIXED_QUOTES_PATTERN.sub(_to_space, sql)
    if has_double:
        return DOUBLE_QUOTES_PATTERN.sub(_to_space, sql)
    if has_single:
        return SINGLE_QUOTES_PATTERN.sub(_to_space, sql)
    return sql
