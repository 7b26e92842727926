"""
Title and casing helpers with Turkish case mapping.

Python's str.upper()/lower() follow the default Unicode mapping, which
gets the dotted and dotless i wrong for Turkish:
- upper("istanbul") should be "İSTANBUL", not "ISTANBUL"
- lower("IŞIK") should be "ışık", not "işik"

Examples:
- upper("ayşe yılmaz", "tr") -> "AYŞE YILMAZ"
- sentence_case("YAZILIM MÜHENDİSİ", "tr") -> "Yazılım mühendisi"
- detect_language("Saygılarımla, Ayşe") -> "tr"
- fold_turkish("Şükrü Işık") -> "Sükrü Isik"
"""

import re

_TR_UPPER = str.maketrans({"i": "İ", "ı": "I"})
_TR_LOWER = str.maketrans({"I": "ı", "İ": "i"})
# Letters outside WinAnsi, the encoding of the PDF base fonts
_WINANSI_FOLD = str.maketrans({"ş": "s", "Ş": "S", "ğ": "g", "Ğ": "G", "ı": "i", "İ": "I"})

TURKISH_CHARS = re.compile(r"[çğıöşüÇĞİÖŞÜ]")
TURKISH_WORDS = re.compile(
    r"\b(için|ile|bir|bu|şu|olan|saygılarımla|mektub\w*|başvuru|pozisyon\w*|şirket\w*)\b",
    re.IGNORECASE,
)
ENGLISH_WORDS = re.compile(
    r"\b(for|with|and|the|this|that|position|company|application|letter|regards)\b",
    re.IGNORECASE,
)


def upper(text: str, lang: str = "en") -> str:
    if not text:
        return ""
    if lang == "tr":
        return text.translate(_TR_UPPER).upper()
    return text.upper()


def lower(text: str, lang: str = "en") -> str:
    if not text:
        return ""
    if lang == "tr":
        return text.translate(_TR_LOWER).lower()
    return text.lower()



def fold_turkish(text: str) -> str:
    """Replace the Turkish letters the base PDF fonts cannot draw with ASCII ones."""
    return (text or "").translate(_WINANSI_FOLD)


def sentence_case(text: str, lang: str = "en") -> str:
    """Only the first letter upper-cased, the rest lower-cased."""
    cleaned = lower((text or "").strip(), lang)
    if not cleaned:
        return ""
    return upper(cleaned[0], lang) + cleaned[1:]


def detect_language(text: str) -> str:
    """
    Guess 'tr' or 'en' from content.

    Turkish letters or common Turkish words win; common English words
    give 'en'; anything else defaults to 'tr'.
    """
    if not text:
        return "tr"
    if TURKISH_CHARS.search(text) or TURKISH_WORDS.search(text):
        return "tr"
    if ENGLISH_WORDS.search(text):
        return "en"
    return "tr"


def clean_filename(name: str) -> str:
    """'Ayşe  Yılmaz' -> 'Ay_e_Y_lmaz' (ASCII alnum and single underscores)."""
    cleaned = re.sub(r"[^a-zA-Z0-9]", "_", name or "")
    cleaned = re.sub(r"_+", "_", cleaned)
    return cleaned.strip("_")
