"""
Search Keys - Derive the transliterated and initials forms of app names.

Chinese names are converted with pypinyin so that "微信" can be found by
typing "weixin" or "wx". Latin words pass through unchanged for the full
form and contribute their first letter to the initials form:

    "QQ音乐"             -> "qqyinyue" / "qyy"
    "Visual Studio Code" -> "visualstudiocode" / "vsc"
"""

import re

from pypinyin import Style, lazy_pinyin

from quickgrid.models import Item

# A run of Han characters (converted as a phrase), or of ASCII letters/digits.
# Han covers the unified blocks, compatibility ideographs and extensions B+.
_TOKENS = re.compile(
    r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\U00020000-\U0003134f]+"
    r"|[A-Za-z0-9]+"
)


def _is_han(token: str) -> bool:
    return not token[0].isascii()


def transliterate(name: str) -> str:
    """Full pinyin form of a name, lowercased with separators removed."""
    parts = []
    for token in _TOKENS.findall(name):
        if _is_han(token):
            parts.extend(lazy_pinyin(token, style=Style.NORMAL))
        else:
            parts.append(token)
    return "".join(parts).lower()


def initials(name: str) -> str:
    """First letter of every pinyin syllable and every Latin word."""
    letters = []
    for token in _TOKENS.findall(name):
        if _is_han(token):
            letters.extend(lazy_pinyin(token, style=Style.FIRST_LETTER))
        else:
            letters.append(token[0])
    return "".join(letters).lower()


def make_item(identifier: str, display_name: str) -> Item:
    """Build an Item with its derived search keys filled in."""
    return Item(
        identifier=identifier,
        display_name=display_name,
        transliterated=transliterate(display_name),
        initials=initials(display_name),
    )
