"""LabelRegistry: ラベルごとの SQL 断片とバインド値の登録."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlmarkup._messages import format_message
from sqlmarkup.exceptions import InvalidLabelError
from sqlmarkup.normalizer import CanonicalBind
from sqlmarkup.parser.tokenizer import LABEL_PATTERN

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelEntry:
    """登録済みラベル."""

    name: str
    """ラベル名."""

    sql: str = ""
    """置換SQL. 空白のみの場合はトークンの埋め込み断片を使う."""

    bind: CanonicalBind | None = None
    """バインド値. None の場合はラベルを出力から削除する."""

    @property
    def suppressed(self) -> bool:
        """ラベルを削除する指定か."""
        return self.bind is None


def assert_label(label: str) -> None:
    """ラベル名の形式を検証する.

    Raises:
        InvalidLabelError: 形式が不正な場合

    """
    if not isinstance(label, str) or not LABEL_PATTERN.match(label):
        raise InvalidLabelError(format_message("invalid_label", label=label))


class LabelRegistry:
    """ラベル登録簿.

    1つのコンパイラインスタンスに属し、そのインスタンスと同じ寿命を持つ。
    スレッドセーフではない。
    """

    def __init__(self, *, allow_override: bool = True) -> None:
        """初期化.

        Args:
            allow_override: False の場合、同じラベルの2回目以降の登録を無視する

        """
        self.allow_override = allow_override
        self._entries: dict[str, LabelEntry] = {}

    def accepts(self, label: str) -> bool:
        """label の登録（上書き）が可能か."""
        return self.allow_override or label not in self._entries

    def register(
        self,
        label: str,
        sql: str = "",
        bind: Any = None,
        *,
        normalize: Callable[[Any], CanonicalBind | None] | None = None,
    ) -> bool:
        """ラベルを登録する.

        Args:
            label: ラベル名
            sql: 置換SQL（空の場合は埋め込み断片を使う）
            bind: バインド値（None はラベル削除）
            normalize: 指定した場合、登録が受け付けられた後に bind を正規化する

        Returns:
            登録した場合は True、上書き不可で無視した場合は False

        Raises:
            InvalidLabelError: ラベル名が不正な場合

        """
        if not self.accepts(label):
            _log.debug("Label %r is already registered; override ignored", label)
            return False
        assert_label(label)
        if normalize is not None:
            bind = normalize(bind)
        if bind is None:
            sql = ""
        self._entries[label] = LabelEntry(name=label, sql=sql, bind=bind)
        return True

    def get(self, label: str) -> LabelEntry | None:
        """登録済みラベルを返す（未登録の場合は None）."""
        return self._entries.get(label)

    def resolve(self, label: str) -> LabelEntry:
        """ラベルを解決する.

        未登録のラベルはバインド値 None（削除指定）として扱う。
        """
        entry = self._entries.get(label)
        if entry is None:
            return LabelEntry(name=label)
        return entry

    def clear(self) -> None:
        """全登録を破棄する."""
        self._entries.clear()

    def __contains__(self, label: object) -> bool:
        return label in self._entries

    def __len__(self) -> int:
        return len(self._entries)
