"""Bind のテスト."""

from __future__ import annotations

import pytest

from sqlmarkup import (
    Bind,
    BoundValue,
    InvalidBindValueError,
    MixedBindShapeError,
    ParamType,
    ReservedPlaceholderError,
)

INT = ParamType.INT
STR = ParamType.STR


class TestBindParamType:
    """ファクトリごとのパラメータ型."""

    def test_as_int(self) -> None:
        bind = Bind.as_int(1)
        assert isinstance(bind, Bind)
        assert bind.values == [BoundValue(1, INT)]
        assert bind.param_type is INT

    def test_as_str(self) -> None:
        assert Bind.as_str("str").values == [BoundValue("str", STR)]

    def test_as_null(self) -> None:
        assert Bind.as_null(None).values == [BoundValue(None, ParamType.NULL)]
        assert Bind.as_null("not null").values == [BoundValue("not null", ParamType.NULL)]

    def test_as_null_without_args(self) -> None:
        assert Bind.as_null().values == [BoundValue(None, ParamType.NULL)]

    def test_as_bool(self) -> None:
        assert Bind.as_bool(False).values == [BoundValue(False, ParamType.BOOL)]

    def test_as_lob(self) -> None:
        assert Bind.as_lob(b"lob value").values == [BoundValue(b"lob value", ParamType.LOB)]

    def test_param_type_from_string(self) -> None:
        assert Bind([1], "int").param_type is INT

    def test_invalid_param_type(self) -> None:
        with pytest.raises(InvalidBindValueError):
            Bind([1], "decimal")


class TestBindValues:
    """位置指定・名前付きの値."""

    def test_empty(self) -> None:
        bind = Bind.as_int()
        assert bind.values == []
        assert len(bind) == 0
        assert bind.is_named is False

    def test_in_list(self) -> None:
        assert Bind.as_int([1, 2, 3]).values == [BoundValue([1, 2, 3], INT)]

    def test_scalars_and_in_list(self) -> None:
        assert Bind.as_int(1, 2, (3, 4), 5).values == [
            BoundValue(1, INT),
            BoundValue(2, INT),
            BoundValue([3, 4], INT),
            BoundValue(5, INT),
        ]

    def test_named(self) -> None:
        bind = Bind.as_str({":name": "chopin", ":addr": "Amoy"})
        assert bind.is_named is True
        assert bind.values == {
            ":name": BoundValue("chopin", STR),
            ":addr": BoundValue("Amoy", STR),
        }

    def test_named_across_args(self) -> None:
        bind = Bind.as_str({":name": "chopin"}, {":addr": "Amoy"})
        assert bind.values == {
            ":name": BoundValue("chopin", STR),
            ":addr": BoundValue("Amoy", STR),
        }

    def test_named_in_list(self) -> None:
        assert Bind.as_str({":name": "chopin", ":age": [1, 2, 3]}).values == {
            ":name": BoundValue("chopin", STR),
            ":age": BoundValue([1, 2, 3], STR),
        }

    def test_named_in_list_from_dict(self) -> None:
        """名前付き IN句に dict を渡すと値のみを使う."""
        bind = Bind.as_str({":age": {"baby": 1, "children": 18, "adult": 60}})
        assert bind.values == {":age": BoundValue([1, 18, 60], STR)}

    def test_values_is_copy(self) -> None:
        bind = Bind.as_int(1)
        values = bind.values
        assert isinstance(values, list)
        values.append(BoundValue(2, INT))
        assert len(bind) == 1

    def test_equality(self) -> None:
        assert Bind.as_int(1, 2) == Bind.as_int(1, 2)
        assert Bind.as_int(1) != Bind.as_str(1)
        assert repr(Bind.as_int()) == "Bind(INT, [])"


class TestBindErrors:
    """構築時の検証."""

    def test_mixed_keys(self) -> None:
        with pytest.raises(MixedBindShapeError):
            Bind.as_int({":limit": 10, ":offset": 20, 0: 2, 1: 3})

    def test_positional_after_named(self) -> None:
        with pytest.raises(MixedBindShapeError):
            Bind.as_int({":limit": 10, ":offset": 20}, 1, 2, 3)

    def test_in_list_after_named(self) -> None:
        with pytest.raises(MixedBindShapeError):
            Bind.as_int({":limit": 10}, [1, 2])

    def test_named_after_positional(self) -> None:
        with pytest.raises(MixedBindShapeError):
            Bind.as_int(1, 2, 3, {":limit": 10})

    def test_invalid_value(self) -> None:
        with pytest.raises(InvalidBindValueError):
            Bind.as_int(1, object())

    def test_invalid_in_list_value(self) -> None:
        with pytest.raises(InvalidBindValueError):
            Bind.as_int([1, [2]])

    def test_invalid_placeholder(self) -> None:
        with pytest.raises(InvalidBindValueError):
            Bind.as_int({"limit": 10, "offset": 20})

    def test_invalid_placeholder_characters(self) -> None:
        with pytest.raises(InvalidBindValueError):
            Bind.as_int({":li-mit": 10})

    @pytest.mark.parametrize("key", [":__1__", ":__2_1__", ":ids_1__", ":_"])
    def test_reserved_placeholder(self, key: str) -> None:
        """展開キーと衝突しうる名前は使えない."""
        with pytest.raises(ReservedPlaceholderError):
            Bind.as_int({key: 10})
