"""ParamType と型判定のテスト."""

from __future__ import annotations

import pytest

from sqlmarkup import InvalidBindValueError, ParamType
from sqlmarkup.param_type import detect_param_type


class TestParamTypeOf:
    """型タグの変換."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("string", ParamType.STR),
            ("int", ParamType.INT),
            ("bool", ParamType.BOOL),
            ("null", ParamType.NULL),
            ("lob", ParamType.LOB),
            (ParamType.INT, ParamType.INT),
        ],
    )
    def test_of(self, tag: ParamType | str, expected: ParamType) -> None:
        assert ParamType.of(tag) is expected

    def test_unknown_tag(self) -> None:
        with pytest.raises(InvalidBindValueError):
            ParamType.of("decimal")


class TestDetectParamType:
    """値からの型判定."""

    @pytest.mark.parametrize("value", [1, True, None, b"x", "a"])
    def test_detect_disabled(self, value: object) -> None:
        assert detect_param_type(value) is ParamType.STR

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1, ParamType.INT),
            (0, ParamType.INT),
            (True, ParamType.BOOL),
            (False, ParamType.BOOL),
            (None, ParamType.NULL),
            (b"x", ParamType.LOB),
            (bytearray(b"x"), ParamType.LOB),
            ("1", ParamType.STR),
            (1.5, ParamType.STR),
        ],
    )
    def test_detect_enabled(self, value: object, expected: ParamType) -> None:
        assert detect_param_type(value, detect=True) is expected
