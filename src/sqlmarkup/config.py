"""sqlmarkup 設定値.

モジュール変数として保持し、アプリケーション起動時やテストで上書きする。
"""

ERROR_MESSAGE_LANGUAGE = "ja"
"""エラーメッセージの言語 ("ja" / "en")."""

ERROR_INCLUDE_SQL = False
"""エラーメッセージにテンプレートSQLを含めるか."""
