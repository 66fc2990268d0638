from __future__ import annotations
import unicodedata

# Katakana letters (ァ..ヶ) sit exactly 0x60 above their hiragana (ぁ..ゖ)
_KATA_FIRST = 0x30A1
_KATA_LAST = 0x30F6
_KATA_TO_HIRA = 0x60
# iteration marks ヽヾ -> ゝゞ use the same offset
_ITER_FIRST = 0x30FD
_ITER_LAST = 0x30FE


def kata_to_hira(text: str) -> str:
    """Convert katakana to hiragana; everything else (kanji, ー, Latin) is kept."""
    out = []
    for ch in text:
        o = ord(ch)
        if _KATA_FIRST <= o <= _KATA_LAST or _ITER_FIRST <= o <= _ITER_LAST:
            out.append(chr(o - _KATA_TO_HIRA))
        else:
            out.append(ch)
    return "".join(out)


def normalize(text: str | None) -> str:
    """
    Canonical form used for indexing and querying:
      * NFKC: full-width / half-width forms collapse (ｶﾀｶﾅ -> カタカナ, Ａ -> A)
      * lower case (Latin only; no-op on CJK)
      * katakana folded to hiragana
    Operates on code points, so the n-gram step can slice the result directly.
    """
    if not text:
        return ""
    return kata_to_hira(unicodedata.normalize("NFKC", text).lower())
