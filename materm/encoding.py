"""Character encodings offered by the terminal's encoding menu."""

from __future__ import annotations

import locale
from dataclasses import InitVar, dataclass, field

CURRENT_LOCALE_ID = "current"

# Every printable ASCII character from space to tilde.
_ASCII_SAMPLE = "".join(chr(code) for code in range(32, 127))

_BUILTIN_TABLE: tuple[tuple[str, str], ...] = (
    ("ISO-8859-1", "Western"),
    ("ISO-8859-2", "Central European"),
    ("ISO-8859-3", "South European"),
    ("ISO-8859-4", "Baltic"),
    ("ISO-8859-5", "Cyrillic"),
    ("ISO-8859-6", "Arabic"),
    ("ISO-8859-7", "Greek"),
    ("ISO-8859-8", "Hebrew Visual"),
    ("ISO-8859-8-I", "Hebrew"),
    ("ISO-8859-9", "Turkish"),
    ("ISO-8859-10", "Nordic"),
    ("ISO-8859-13", "Baltic"),
    ("ISO-8859-14", "Celtic"),
    ("ISO-8859-15", "Western"),
    ("ISO-8859-16", "Romanian"),
    ("UTF-8", "Unicode"),
    ("ARMSCII-8", "Armenian"),
    ("BIG5", "Chinese Traditional"),
    ("BIG5-HKSCS", "Chinese Traditional"),
    ("CP866", "Cyrillic/Russian"),
    ("EUC-JP", "Japanese"),
    ("EUC-KR", "Korean"),
    ("EUC-TW", "Chinese Traditional"),
    ("GB18030", "Chinese Simplified"),
    ("GB2312", "Chinese Simplified"),
    ("GBK", "Chinese Simplified"),
    ("GEORGIAN-PS", "Georgian"),
    ("IBM850", "Western"),
    ("IBM852", "Central European"),
    ("IBM855", "Cyrillic"),
    ("IBM857", "Turkish"),
    ("IBM862", "Hebrew"),
    ("IBM864", "Arabic"),
    ("ISO-2022-JP", "Japanese"),
    ("ISO-2022-KR", "Korean"),
    ("ISO-IR-111", "Cyrillic"),
    ("KOI8-R", "Cyrillic"),
    ("KOI8-U", "Cyrillic/Ukrainian"),
    ("MAC_ARABIC", "Arabic"),
    ("MAC_CE", "Central European"),
    ("MAC_CROATIAN", "Croatian"),
    ("MAC-CYRILLIC", "Cyrillic"),
    ("MAC_DEVANAGARI", "Hindi"),
    ("MAC_FARSI", "Persian"),
    ("MAC_GREEK", "Greek"),
    ("MAC_GUJARATI", "Gujarati"),
    ("MAC_GURMUKHI", "Gurmukhi"),
    ("MAC_HEBREW", "Hebrew"),
    ("MAC_ICELANDIC", "Icelandic"),
    ("MAC_ROMAN", "Western"),
    ("MAC_ROMANIAN", "Romanian"),
    ("MAC_TURKISH", "Turkish"),
    ("MAC_UKRAINIAN", "Cyrillic/Ukrainian"),
    ("SHIFT_JIS", "Japanese"),
    ("TCVN", "Vietnamese"),
    ("TIS-620", "Thai"),
    ("UHC", "Korean"),
    ("VISCII", "Vietnamese"),
    ("WINDOWS-1250", "Central European"),
    ("WINDOWS-1251", "Cyrillic"),
    ("WINDOWS-1252", "Western"),
    ("WINDOWS-1253", "Greek"),
    ("WINDOWS-1254", "Turkish"),
    ("WINDOWS-1255", "Hebrew"),
    ("WINDOWS-1256", "Arabic"),
    ("WINDOWS-1257", "Baltic"),
    ("WINDOWS-1258", "Vietnamese"),
)


def current_charset() -> str:
    """Return the character set of the current locale."""
    return locale.getpreferredencoding(False) or "UTF-8"


@dataclass(eq=False)
class TerminalEncoding:
    """A selectable encoding; ``force_valid`` skips the ASCII check."""

    id: str
    name: str
    is_custom: bool = False
    force_valid: InitVar[bool] = False
    is_active: bool = False
    _valid: bool | None = field(default=None, init=False, repr=False)

    def __post_init__(self, force_valid: bool) -> None:
        if force_valid:
            self._valid = True

    def charset(self) -> str:
        """The real charset name; the locale placeholder resolves to the locale's."""
        if self.id == CURRENT_LOCALE_ID:
            return current_charset()
        return self.id

    def is_valid(self) -> bool:
        """Whether printable ASCII passes through this encoding unchanged.

        The result is computed once and remembered.
        """
        if self._valid is None:
            try:
                converted = _ASCII_SAMPLE.encode(self.charset())
            except (LookupError, UnicodeError, ValueError):
                self._valid = False
            else:
                self._valid = converted == _ASCII_SAMPLE.encode("ascii")
        return self._valid


def builtin_encodings() -> dict[str, TerminalEncoding]:
    """Return the built-in encodings keyed by id, the locale placeholder first."""
    table = {
        CURRENT_LOCALE_ID: TerminalEncoding(
            CURRENT_LOCALE_ID, "Current Locale", is_custom=False, force_valid=True
        )
    }
    for charset, name in _BUILTIN_TABLE:
        table[charset] = TerminalEncoding(charset, name, is_custom=False, force_valid=False)
    return table