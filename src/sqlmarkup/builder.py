"""Builder: SQLマークアップのコンパイラ."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from sqlmarkup._messages import format_message
from sqlmarkup.bind import BoundValue, assert_not_reserved
from sqlmarkup.exceptions import (
    BindArityMismatchError,
    EmptyInListError,
    MixedPlaceholderStyleError,
    UnboundPlaceholderError,
)
from sqlmarkup.normalizer import BindNormalizer, CanonicalBind
from sqlmarkup.param_type import ParamType
from sqlmarkup.parser.quote import mask_quotes
from sqlmarkup.parser.tokenizer import Token, TokenKind, tokenize
from sqlmarkup.registry import LabelRegistry

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundParameter:
    """ドライバへ渡すバインドパラメータ."""

    name: str
    """プレースホルダ名（``:name``）."""

    value: Any
    """バインド値."""

    param_type: ParamType
    """パラメータ型."""

    def __iter__(self) -> Iterator[Any]:
        """(name, value, param_type) として展開する."""
        yield self.name
        yield self.value
        yield self.param_type


@dataclass
class CompiledSQL:
    """コンパイル結果."""

    sql: str
    params: dict[str, BoundParameter] = field(default_factory=dict)
    """プレースホルダ名 → バインドパラメータ."""

    @property
    def named_params(self) -> dict[str, Any]:
        """DB-API (named paramstyle) 用の辞書（キーは先頭の ``:`` を除いた名前）."""
        return {name[1:]: param.value for name, param in self.params.items()}

    def __iter__(self) -> Iterator[Any]:
        """``sql, params = builder.compile(...)`` と展開できるようにする."""
        yield self.sql
        yield self.params


@dataclass
class _ExpansionContext:
    """1回の compile 呼び出し全体（全階層）で共有する状態."""

    counter: int = 1
    """? プレースホルダの通し番号."""

    params: dict[str, BoundParameter] = field(default_factory=dict)
    """出力パラメータ."""

    in_lists: dict[str, str] = field(default_factory=dict)
    """名前付き IN句 → 展開済みプレースホルダ列."""


@dataclass
class _Frame:
    """展開中の1階層（トップレベルのテンプレート、またはラベルの断片）."""

    sql: str
    tokens: Iterator[Token]
    entries: Iterator[BoundValue]
    """? に順に割り当てるバインド値."""

    named_bind: dict[str, BoundValue]
    segments: list[str] = field(default_factory=list)
    cursor: int = 0
    """出力済みの位置（sql 上）."""


class Builder:
    """SQLマークアップのコンパイラ.

    ラベル付きの条件断片を含むSQLテンプレートとバインド値から、
    名前付きプレースホルダのみを使うSQLとパラメータを生成する。

    ラベル登録はインスタンスごとに保持される。登録と compile を複数スレッドから
    同時に行う場合は呼び出し側で排他するか、文ごとにインスタンスを作ること。

    Examples:
        >>> builder = Builder().register("limit", Bind.as_int(10, 20))
        >>> sql, params = builder.compile(
        ...     "select * from user where name=:name {{limit: limit ?,?}}",
        ...     {":name": "chopin"},
        ... )
        >>> sql
        'select * from user where name=:name  limit :__1__,:__2__'

    """

    def __init__(self, *, allow_override: bool = True, detect_value_type: bool = False) -> None:
        """初期化.

        Args:
            allow_override: False の場合、同じラベルは最初の登録を維持する
            detect_value_type: True の場合、型未指定の値の型を値から判定する
                （int / bool / None / bytes）。False の場合は全て ``ParamType.STR``

        """
        self._labels = LabelRegistry(allow_override=allow_override)
        self._normalizer = BindNormalizer(detect_value_type=detect_value_type)

    @property
    def allow_override(self) -> bool:
        """ラベルの再登録で上書きするか."""
        return self._labels.allow_override

    @property
    def detect_value_type(self) -> bool:
        """値から型を判定するか."""
        return self._normalizer.detect_value_type

    @property
    def labels(self) -> LabelRegistry:
        """ラベル登録簿."""
        return self._labels

    def register(self, label: str, bind: Any = (), sql: str = "") -> Builder:
        """ラベルを登録する.

        Args:
            label: ラベル名
            bind: バインド値。None の場合、ラベルを埋め込み断片ごと削除する
            sql: 埋め込み断片の代わりに使うSQL

        Returns:
            self

        Raises:
            InvalidLabelError: ラベル名が不正な場合
            InvalidBindShapeError: バインド値の構造が不正な場合
            InvalidBindValueError: バインド値が不正な場合
            EmptyInListError: IN句リストが空の場合
            ReservedPlaceholderError: 展開用の予約名を使った場合

        """
        self._labels.register(label, sql, bind, normalize=self._normalizer.normalize)
        return self

    build = register

    def compile(self, sql: str, bind: Any = ()) -> CompiledSQL:
        """SQLテンプレートをコンパイルする.

        Args:
            sql: SQLテンプレート
            bind: トップレベルのバインド値

        Returns:
            コンパイル結果

        Raises:
            SqlCompileError: プレースホルダとバインド値が整合しない場合
            InvalidBindShapeError: バインド値の構造が不正な場合
            InvalidBindValueError: バインド値が不正な場合
            EmptyInListError: IN句リストが空の場合
            ReservedPlaceholderError: 展開用の予約名を使った場合

        """
        canonical = self._normalizer.normalize(bind)
        ctx = _ExpansionContext()
        result = CompiledSQL(
            sql=self._expand(sql, canonical if canonical is not None else [], ctx),
            params=ctx.params,
        )
        _log.debug("Compiled SQL: %s", result.sql)
        return result

    prepare = compile

    def run(self, connection: Any, sql: str, bind: Any = ()) -> Any:
        """コンパイルしたSQLを実行し、カーソルを返す.

        Args:
            connection: DB 接続オブジェクト（PEP 249 DB-API 2.0 準拠、
                named paramstyle に対応したドライバ）
            sql: SQLテンプレート
            bind: トップレベルのバインド値

        Returns:
            実行済みカーソル

        Raises:
            SqlMarkupError: コンパイルに失敗した場合
            Exception: ドライバの例外（そのまま送出する）

        """
        compiled = self.compile(sql, bind)
        cursor = connection.cursor()
        try:
            cursor.execute(compiled.sql, compiled.named_params)
        except Exception as e:
            _log.error("SQL execution failed: %s. SQL: %s", e, compiled.sql, exc_info=True)
            cursor.close()
            raise
        return cursor

    def _open_frame(self, sql: str, bind: CanonicalBind) -> _Frame:
        """1階層分のテンプレートをトークン化し、プレースホルダとバインド値を照合する."""
        tokens = tokenize(mask_quotes(sql))

        positional = sum(1 for t in tokens if t.kind is TokenKind.POSITIONAL)
        named = sum(1 for t in tokens if t.kind is TokenKind.NAMED)
        if positional and named:
            raise MixedPlaceholderStyleError(format_message("mixed_placeholder_style", sql=sql))

        named_bind: dict[str, BoundValue] = bind if isinstance(bind, dict) else {}
        ordered: list[BoundValue] = bind if isinstance(bind, list) else []
        if positional:
            if named_bind:
                msg = format_message("named_bind_for_positional", sql=sql)
                raise MixedPlaceholderStyleError(msg)
            if positional != len(ordered):
                msg = format_message(
                    "bind_arity_mismatch",
                    sql=sql,
                    placeholders=positional,
                    values=len(ordered),
                )
                raise BindArityMismatchError(msg)

        return _Frame(sql=sql, tokens=iter(tokens), entries=iter(ordered), named_bind=named_bind)

    def _expand(self, sql: str, bind: CanonicalBind, ctx: _ExpansionContext) -> str:
        """テンプレートを展開する.

        ラベルの埋め込み断片は新しい階層としてスタックに積み、
        展開し終えた階層の結果を親階層の出力に差し込む。
        """
        stack = [self._open_frame(sql, bind)]
        while True:
            frame = stack[-1]
            token = next(frame.tokens, None)
            if token is None:
                frame.segments.append(frame.sql[frame.cursor :])
                expanded = "".join(frame.segments)
                stack.pop()
                if not stack:
                    return expanded
                stack[-1].segments.append(expanded)
                continue

            frame.segments.append(frame.sql[frame.cursor : token.start])
            frame.cursor = token.end
            if token.kind is TokenKind.POSITIONAL:
                frame.segments.append(self._expand_positional(next(frame.entries), ctx))
            elif token.kind is TokenKind.NAMED:
                frame.segments.append(
                    self._expand_named(token, frame.named_bind, ctx, frame.sql)
                )
            else:
                entry = self._labels.resolve(token.name)
                if entry.suppressed:
                    continue
                fragment = entry.sql if entry.sql.strip() else token.fragment(frame.sql)
                stack.append(self._open_frame(fragment, entry.bind or []))

    @staticmethod
    def _expand_positional(entry: BoundValue, ctx: _ExpansionContext) -> str:
        """? を ``:__{n}__``（IN句は ``:__{n}_{j}__`` の列）に置換する."""
        index = ctx.counter
        ctx.counter += 1
        if not entry.is_in_list:
            key = f":__{index}__"
            ctx.params[key] = BoundParameter(key, entry.value, entry.param_type)
            return key
        if not entry.value:
            raise EmptyInListError(format_message("empty_in_list"))
        keys: list[str] = []
        for j, value in enumerate(entry.value, start=1):
            key = f":__{index}_{j}__"
            ctx.params[key] = BoundParameter(key, value, entry.param_type)
            keys.append(key)
        return ",".join(keys)

    @staticmethod
    def _expand_named(
        token: Token,
        bind: dict[str, BoundValue],
        ctx: _ExpansionContext,
        sql: str,
    ) -> str:
        """:name を解決する.

        スカラー値は名前をそのまま使い、IN句は ``:name_{j}__`` の列に置換する。
        同じ名前の IN句は、別の階層で使われても同じプレースホルダ列を再利用する。
        """
        key = token.name
        assert_not_reserved(key, sql=sql)
        if key in ctx.params:
            return token.text

        entry = bind.get(key)
        if entry is None:
            cached = ctx.in_lists.get(key)
            if cached is None:
                msg = format_message("unbound_placeholder", sql=sql, placeholder=key)
                raise UnboundPlaceholderError(msg)
            return cached

        if not entry.is_in_list:
            ctx.params[key] = BoundParameter(key, entry.value, entry.param_type)
            return token.text

        cached = ctx.in_lists.get(key)
        if cached is not None:
            return cached
        if not entry.value:
            raise EmptyInListError(format_message("empty_in_list"))
        keys: list[str] = []
        for j, value in enumerate(entry.value, start=1):
            element_key = f"{key}_{j}__"
            ctx.params[element_key] = BoundParameter(element_key, value, entry.param_type)
            keys.append(element_key)
        joined = ctx.in_lists[key] = ",".join(keys)
        return joined

