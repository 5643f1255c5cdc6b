from __future__ import annotations

DEVANAGARI_DIGITS = "०१२३४५६७८९"
ASCII_DIGITS = "0123456789"

_TO_DEVANAGARI = str.maketrans(ASCII_DIGITS, DEVANAGARI_DIGITS)
_TO_ASCII = str.maketrans(DEVANAGARI_DIGITS, ASCII_DIGITS)


def to_devanagari_digits(s: str) -> str:
    return s.translate(_TO_DEVANAGARI)

def to_ascii_digits(s: str) -> str:
    return s.translate(_TO_ASCII)

def is_ascii_number(s: str) -> bool:
    return s.isascii() and s.isdigit()
