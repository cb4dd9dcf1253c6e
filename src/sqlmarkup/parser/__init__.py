"""SQLマークアップパーサーパッケージ."""

from sqlmarkup.parser.quote import mask_quotes
from sqlmarkup.parser.tokenizer import Token, TokenKind, tokenize

__all__ = ["Token", "TokenKind", "mask_quotes", "tokenize"]
