"""SQLマークアップの字句解析."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# マークアップ:
#   {{label}}             - ラベル（登録された SQL 断片に置換、未登録なら削除）
#   {{label:fragment}}    - 埋め込み断片付きラベル（断片内にラベルを入れ子にできる）
#   ?                     - 位置指定プレースホルダ
#   :name                 - 名前付きプレースホルダ
#
# 例:
#   select * from user where name=:name {{age: and age > ?}}
#   select * from user {{mobile: where mobile like '%138%'{{age: and age > ?}}}}

LABEL_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
"""ラベル名の形式."""

LABEL_OPEN_PATTERN = re.compile(r"\{\{([a-zA-Z_][a-zA-Z0-9_]*)")

NAMED_PATTERN = re.compile(r":[a-zA-Z0-9_]+")

POSITIONAL_MARK = "?"


class TokenKind(Enum):
    """トークン種別."""

    POSITIONAL = "positional"
    NAMED = "named"
    LABEL = "label"


@dataclass(frozen=True)
class Token:
    """マークアップトークン."""

    kind: TokenKind
    """トークン種別."""

    start: int
    """元文字列内の開始位置."""

    end: int
    """元文字列内の終了位置."""

    text: str
    """マッチした文字列（マスク済みSQL上の値）."""

    name: str = ""
    """ラベル名、または名前付きプレースホルダ（``:name``）."""

    fragment_start: int | None = None
    """埋め込み断片の開始位置（``:`` の次）."""

    fragment_end: int | None = None
    """埋め込み断片の終了位置（閉じ ``}}`` の位置）."""

    @property
    def length(self) -> int:
        """トークンの長さ."""
        return self.end - self.start

    @property
    def has_fragment(self) -> bool:
        """埋め込み断片を持つラベルか."""
        return self.fragment_start is not None

    def fragment(self, sql: str) -> str:
        """埋め込み断片を取り出す.

        マスク前の SQL を渡すことで、引用符内のリテラルを含む元の断片を得る。

        Args:
            sql: トークン化した文字列と同じ長さのSQL

        Returns:
            断片文字列（断片を持たない場合は空文字）

        """
        if self.fragment_start is None or self.fragment_end is None:
            return ""
        return sql[self.fragment_start : self.fragment_end]


def tokenize(sql: str) -> list[Token]:
    """SQL からマークアップトークンを抽出する.

    各位置で、ラベル、``?``、``:name`` の順にマッチを試みる。
    引用符内の誤検出を避けるため、``mask_quotes`` 済みの文字列を渡すこと。

    Args:
        sql: マスク済みSQL

    Returns:
        Token のリスト（出現順）

    """
    tokens: list[Token] = []
    pos = 0
    length = len(sql)

    while pos < length:
        ch = sql[pos]

        if ch == "{":
            label = _match_label(sql, pos)
            if label is not None:
                name, fragment, end = label
                tokens.append(
                    Token(
                        kind=TokenKind.LABEL,
                        start=pos,
                        end=end,
                        text=sql[pos:end],
                        name=name,
                        fragment_start=fragment[0] if fragment else None,
                        fragment_end=fragment[1] if fragment else None,
                    )
                )
                pos = end
                continue
        elif ch == POSITIONAL_MARK:
            tokens.append(Token(kind=TokenKind.POSITIONAL, start=pos, end=pos + 1, text=ch))
            pos += 1
            continue
        elif ch == ":":
            m = NAMED_PATTERN.match(sql, pos)
            if m:
                tokens.append(
                    Token(
                        kind=TokenKind.NAMED,
                        start=m.start(),
                        end=m.end(),
                        text=m.group(0),
                        name=m.group(0),
                    )
                )
                pos = m.end()
                continue

        pos += 1

    return tokens


def _match_label(sql: str, start: int) -> tuple[str, tuple[int, int] | None, int] | None:
    """start 位置からラベルトークンをマッチする.

    断片内の ``{`` ``}`` は入れ子のラベルとしてのみ許容する。
    入れ子の深さは開いている断片付きラベルの数で数える。

    Returns:
        (ラベル名, 断片の範囲, 終了位置)。マッチしない場合は None

    """
    m = LABEL_OPEN_PATTERN.match(sql, start)
    if m is None:
        return None
    name = m.group(1)
    pos = m.end()

    if sql.startswith("}}", pos):
        return name, None, pos + 2
    if not sql.startswith(":", pos):
        return None

    pos += 1
    fragment_start = pos
    depth = 0
    length = len(sql)
    while pos < length:
        ch = sql[pos]
        if ch == "}":
            if not sql.startswith("}}", pos):
                return None
            if depth == 0:
                return name, (fragment_start, pos), pos + 2
            depth -= 1
            pos += 2
            continue
        if ch == "{":
            nested = LABEL_OPEN_PATTERN.match(sql, pos)
            if nested is None:
                return None
            pos = nested.end()
            if sql.startswith("}}", pos):
                pos += 2
                continue
            if not sql.startswith(":", pos):
                return None
            depth += 1
            pos += 1
            continue
        pos += 1
    return None
