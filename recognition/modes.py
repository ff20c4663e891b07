"""
Character modes: which character classes the recognizer should return.

Modes decide three things: the EasyOCR languages to load, whether the reader
is constrained to digits, and which characters are stripped from the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from config import (
    DEFAULT_READ_DIGITS,
    DEFAULT_READ_ENGLISH,
    DEFAULT_READ_JAPANESE,
    DIGIT_ONLY_ALLOWLIST,
    JAPANESE_LANGUAGE_CODE,
    LATIN_LANGUAGE_CODE,
)

DIGITS_PATTERN = re.compile(r"[0-9]")
LATIN_PATTERN = re.compile(r"[A-Za-z]")
# Hiragana, Katakana, CJK Extension A, CJK Unified Ideographs, halfwidth Katakana
JAPANESE_PATTERN = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uff66-\uff9f]")


@dataclass(frozen=True)
class CharacterModes:
    """Character classes enabled for one recognition run.

    Attributes:
        japanese: Read Hiragana, Katakana and Kanji.
        english: Read Latin letters.
        digits: Read digits.
    """

    japanese: bool = DEFAULT_READ_JAPANESE
    english: bool = DEFAULT_READ_ENGLISH
    digits: bool = DEFAULT_READ_DIGITS

    @property
    def any_enabled(self) -> bool:
        return self.japanese or self.english or self.digits

    @property
    def digits_only(self) -> bool:
        return self.digits and not self.japanese and not self.english

    def to_dict(self) -> dict[str, bool]:
        return {"japanese": self.japanese, "english": self.english, "digits": self.digits}


DEFAULT_CHARACTER_MODES = CharacterModes()


def resolve_languages(modes: CharacterModes) -> list[str]:
    """Map character modes to EasyOCR language codes.

    Digits come with the Latin model, so english or digits both load "en".
    Returns an empty list when no mode is enabled.
    """
    languages: list[str] = []
    if modes.japanese:
        languages.append(JAPANESE_LANGUAGE_CODE)
    if modes.english or modes.digits:
        languages.append(LATIN_LANGUAGE_CODE)
    return list(dict.fromkeys(languages))


def build_readtext_options(modes: CharacterModes) -> dict:
    """Keyword arguments for Reader.readtext() under the given modes.

    Digits-only reads the image as one block restricted to digits and
    punctuation. Every other combination runs unconstrained, line by line.
    """
    if modes.digits_only:
        return {"paragraph": True, "allowlist": DIGIT_ONLY_ALLOWLIST}
    return {"paragraph": False}


def filter_by_modes(text: str, modes: CharacterModes) -> str:
    """Strip the character classes that are switched off, then trim."""
    result = text
    if not modes.digits:
        result = DIGITS_PATTERN.sub("", result)
    if not modes.english:
        result = LATIN_PATTERN.sub("", result)
    if not modes.japanese:
        result = JAPANESE_PATTERN.sub("", result)
    return result.strip()
