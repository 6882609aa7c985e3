"""Transliteration between Cyrillic and Latin script."""

from __future__ import annotations

from collections.abc import Iterable

_TO_LATIN: list[tuple[str, str]] = [
    ("А", "A"), ("Б", "B"), ("В", "V"), ("Г", "G"), ("Д", "D"), ("Е", "E"),
    ("Ё", "Yo"), ("Ж", "Zh"), ("З", "Z"), ("И", "I"), ("Й", "I"), ("К", "K"),
    ("Л", "L"), ("М", "M"), ("Н", "N"), ("О", "O"), ("П", "P"), ("Р", "R"),
    ("С", "S"), ("Т", "T"), ("У", "U"), ("Ф", "F"), ("Х", "Kh"), ("Х", "H"),
    ("Ц", "Ts"), ("Ч", "Ch"), ("Ш", "Sh"), ("Щ", "Shch"), ("Ъ", "Ie"),
    ("Ы", "Y"), ("Ь", "'"), ("Э", "E"), ("Ю", "Iu"), ("Я", "Ia"),
    ("а", "a"), ("б", "b"), ("в", "v"), ("г", "g"), ("д", "d"), ("е", "e"),
    ("ё", "yo"), ("ж", "zh"), ("з", "z"), ("и", "i"), ("й", "i"), ("к", "k"),
    ("л", "l"), ("м", "m"), ("н", "n"), ("о", "o"), ("п", "p"), ("р", "r"),
    ("с", "s"), ("т", "t"), ("у", "u"), ("ф", "f"), ("х", "kh"), ("ц", "ts"),
    ("ч", "ch"), ("ш", "sh"), ("щ", "shch"), ("ъ", "ie"), ("ы", "y"),
    ("ь", "'"), ("э", "e"), ("ю", "iu"), ("я", "ia"), ("№", "#"),
]

_FROM_LATIN: list[tuple[str, str]] = [
    ("А", "A"), ("Б", "B"), ("В", "V"), ("В", "W"), ("Г", "G"), ("Д", "D"),
    ("Дж", "J"), ("Э", "E"), ("Ё", "Yo"), ("Ж", "Zh"), ("З", "Z"), ("З", "Th"),
    ("Зэ", "The"), ("И", "I"), ("Й", "I"), ("К", "C"), ("К", "K"), ("К", "Q"),
    ("К", "Ck"), ("Кс", "X"), ("Л", "L"), ("М", "M"), ("Н", "N"), ("О", "O"),
    ("Оу", "Ow"), ("П", "P"), ("Р", "R"), ("С", "S"), ("Т", "T"), ("У", "U"),
    ("Ф", "F"), ("Х", "Kh"), ("Х", "H"), ("Ц", "Ts"), ("Ч", "Ch"), ("Ш", "Sh"),
    ("Щ", "Shch"), ("Ъ", "Ie"), ("Ы", "Y"), ("Ь", "'"), ("Е", "E"),
    ("Ю", "Iu"), ("Я", "Ia"),
    ("а", "a"), ("б", "b"), ("в", "v"), ("в", "w"), ("г", "g"), ("д", "d"),
    ("дж", "j"), ("е", "e"), ("ё", "yo"), ("ж", "zh"), ("з", "z"), ("з", "th"),
    ("зэ", "the"), ("и", "i"), ("й", "i"), ("к", "c"), ("к", "k"), ("к", "q"),
    ("к", "ck"), ("кс", "x"), ("л", "l"), ("м", "m"), ("н", "n"), ("о", "o"),
    ("оу", "ow"), ("п", "p"), ("р", "r"), ("с", "s"), ("т", "t"), ("у", "u"),
    ("ф", "f"), ("х", "kh"), ("х", "h"), ("ц", "ts"), ("ч", "ch"), ("ш", "sh"),
    ("щ", "shch"), ("ъ", "ie"), ("ы", "y"), ("ь", "'"), ("э", "e"),
    ("ю", "iu"), ("я", "ia"),
    ("е", "ѣ"), ("Е", "Ѣ"), ("И", "І"), ("и", "і"), ("а", "ä"), ("А", "Ä"),
    ("Йо", "ö"), ("йо", "Ö"), ("Оэ", "Ø"), ("оэ", "ø"), ("А", "Æ"), ("а", "æ"),
    ("О", "Å"), ("о", "å"), ("Аэ", "Ä"), ("аэ", "ä"), ("Оо", "Ꝏ"), ("оо", "ꝏ"),
    ("Ау", "Ꜽ"), ("ау", "ꜽ"), ("Ое", "Œ"), ("ое", "œ"), ("№", "#"),
]


class Transliterator:
    """Applies (native, latin) replacement rules, longest latin form first."""

    def __init__(self, mapping: Iterable[tuple[str, str]]):
        self._rules = sorted(mapping, key=lambda rule: len(rule[1].encode("utf-8")), reverse=True)

    def convert(self, text: str, invert: bool = False) -> str:
        """Replace native forms with latin ones, or the reverse when invert is set."""
        for native, latin in self._rules:
            source, target = (latin, native) if invert else (native, latin)
            text = text.replace(source, target)
        return text


_TO_LATIN_T = Transliterator(_TO_LATIN)
_FROM_LATIN_T = Transliterator(_FROM_LATIN)


def cyr_to_latin(text: str) -> str:
    """Transliterate Cyrillic text into Latin script."""
    return _TO_LATIN_T.convert(text, False)


def latin_to_cyr(text: str) -> str:
    """Transliterate Latin text into Cyrillic script."""
    return _FROM_LATIN_T.convert(text, True)