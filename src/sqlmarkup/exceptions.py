"""sqlmarkup例外クラス."""


class SqlMarkupError(Exception):
    """sqlmarkupの基底例外."""


class InvalidLabelError(SqlMarkupError):
    """ラベル名が不正."""


class InvalidBindShapeError(SqlMarkupError):
    """バインド値の構造が不正."""


class MixedKeyShapeError(InvalidBindShapeError):
    """バインド値に整数キーと文字列キーが混在."""


class MixedBindShapeError(InvalidBindShapeError):
    """Bind に位置指定と名前付きの値が混在."""


class MultidimensionalBindError(InvalidBindShapeError):
    """名前付きキーに複数値の Bind が指定された."""


class InvalidBindValueError(SqlMarkupError):
    """バインドできない値（スカラー/None 以外）."""


class EmptyInListError(SqlMarkupError):
    """IN句リストが空."""


class ReservedPlaceholderError(SqlMarkupError):
    """展開用に予約されたプレースホルダ名が使われた."""


class SqlCompileError(SqlMarkupError):
    """SQLテンプレートのコンパイルエラー."""


class MixedPlaceholderStyleError(SqlCompileError):
    """? と :name が同一テンプレートに混在."""


class BindArityMismatchError(SqlCompileError):
    """? の個数とバインド値の個数が一致しない."""


class UnboundPlaceholderError(SqlCompileError):
    """名前付きプレースホルダに値がバインドされていない."""
