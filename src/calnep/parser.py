"""
calnep.parser
-------------
Free-form Nepali date parsing.

Strategies are tried in a fixed order, cheapest and most specific first; the
first one that yields a valid NepaliDate wins:

  1. strict      'YYYY/MM/DD' via NepaliDate.parse
  2. standard    three numeric tokens as YMD, DMY, MDY
  3. devanagari  Devanagari digits translated, then the whole chain retried
  4. month-name  a month name or alias plus a day and a year
  5. ambiguous   any three numbers, all six orderings

Changing the order changes which reading wins for ambiguous input.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from .core.date import NepaliDate
from .core.errors import CalnepError, InvalidFormatError
from .core.text import to_ascii_digits

log = logging.getLogger(__name__)

Strategy = Callable[[str], Optional[NepaliDate]]

_ERA_RE = re.compile(r"\b[BV]\.?S\b\.?", re.IGNORECASE)
_WORD_RE = re.compile(r"\b(?:gate|miti)\b|गते|मिति", re.IGNORECASE)
_SPACE_RE = re.compile(r"\s+")
_NUMBER_RE = re.compile(r"[0-9]+")
_SPLIT_RE = re.compile(r"[-/._\\ ]+")

# (year, month, day) positions, in priority order
_PERMUTATIONS: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),  # YMD
    (2, 1, 0),  # DMY
    (2, 0, 1),  # MDY
    (1, 0, 2),  # MYD
    (0, 2, 1),  # YDM
    (1, 2, 0),  # DYM
)

_MONTH_ALIASES: Dict[int, Tuple[str, ...]] = {
    1: (
        "baisakh", "baishakh", "baisak", "vaisakh", "vaisakha", "vaishak", "vaisakhi",
        "beshak", "baishak", "baisaga", "baishaga", "vesak",
        "बैशाख", "वैशाख", "बैसाख", "बैशाक", "वैसाख", "वैशाक",
    ),
    2: (
        "jestha", "jeth", "jeshtha", "jyeshtha", "jyestha", "jesth", "jeshth", "jetha",
        "jeshta", "jayshtha", "jayestha", "jesta", "jyesth", "jyaistha", "jaistha",
        "जेष्ठ", "जेठ", "जेस्थ", "ज्येष्ठ", "जेस्ठ", "जेष्ट",
    ),
    3: (
        "asar", "asadh", "ashar", "ashad", "asad", "aasad", "asada", "ashadh", "asadha",
        "ashadha", "ashara", "asara", "ashada", "asaad", "aashar",
        "आषाढ", "असार", "अषाढ", "आशाढ", "आषाढ़", "असाढ", "अषाड",
    ),
    4: (
        "shrawan", "sawan", "saun", "srawan", "shraawan", "shravan", "shravana", "sawun",
        "savan", "shrawana", "sravana", "sawon", "sravan", "saawan", "sharwan", "sarwan",
        "sraawan", "shaun", "shawan",
        "श्रावण", "सावन", "साउन", "श्रावन", "सावण", "श्रवण",
    ),
    5: (
        "bhadra", "bhadau", "bhado", "bhaadra", "bhadow", "bhadava", "bhadaw", "bhada",
        "bhadoo", "bhadon", "bhadrapad", "bhadrapada", "bhaado",
        "भाद्र", "भदौ", "भादौ", "भाद्रपद", "भदो", "भाद्रा",
    ),
    6: (
        "ashwin", "asoj", "ashoj", "aswin", "ashvin", "aaswin", "ashwini", "aswini",
        "ashvini", "aasoj", "aashoj", "asoja", "asojh", "ashoja", "asvin", "aashwin",
        "ashvina", "ashwina", "asvaayuja",
        "आश्विन", "असोज", "अश्विन", "आसोज", "अस्विन", "अश्वीन", "अश्वीना",
    ),
    7: (
        "kartik", "kattik", "kaartik", "kartika", "katik", "kartike", "karttik", "kartiki",
        "karthik", "karthika", "kathik", "kaatik", "katak", "karttic", "kartic",
        "कार्तिक", "कात्तिक", "कार्तीक", "कार्तिका", "कातिक", "कर्तिक",
    ),
    8: (
        "mangsir", "mangshir", "manshir", "marg", "margashirsha", "mangasir", "mangsheer",
        "mangseer", "margshirsha", "mansheer", "margsir", "managsir", "mangaseer",
        "mangsheersh", "mangsira", "mansir", "magshir", "mangir", "magsir",
        "मंसिर", "मङ्सिर", "मार्ग", "मंग्सिर", "मंशिर", "मागशिर", "मार्गशीर्ष",
    ),
    9: (
        "poush", "push", "pus", "paush", "pausha", "pousha", "pos", "pausa", "pousa",
        "posh", "posma", "paus", "poos",
        "पौष", "पुष", "पुस", "पौश", "पौष्य", "पौस",
    ),
    10: (
        "magh", "mag", "maagh", "magha", "maagha", "maga", "magah", "maag", "maaha",
        "maghu", "maghaa", "magg", "mahi", "mahag",
        "माघ", "माग", "माह", "माघा", "माग्ह",
    ),
    11: (
        "falgun", "phagun", "phalgun", "fagan", "fagun", "phalguna", "falguna", "phalgoon",
        "falgunn", "phalguni", "phalagan", "phalagun", "phalag", "fagoon", "phaguna",
        "falgoona", "phagoon",
        "फाल्गुन", "फागुन", "फाल्गुण", "फल्गुन", "फाल्गुना",
    ),
    12: (
        "chaitra", "chait", "chaita", "chet", "chetra", "chaitr", "chaity", "cheta",
        "chaitya", "chaitri", "chaito", "chythro", "chaithra",
        "चैत्र", "चैत", "चैता", "चेत्र", "चैत्रा",
    ),
}

# longest first, so 'magh' wins over 'mag'
MONTH_ALIASES: Tuple[Tuple[str, int], ...] = tuple(
    sorted(
        ((alias, month) for month, aliases in _MONTH_ALIASES.items() for alias in aliases),
        key=lambda am: len(am[0]),
        reverse=True,
    )
)


def expand_year(year: int) -> int:
    """
    '80' -> 2080, '180' -> 1180; four-digit years pass through.

    Only 101..998 get the 1000 offset. 100 and 999 are returned unchanged and
    so fall outside the supported range.
    """
    if year < 100:
        return year + 2000
    if 100 < year < 999:
        return year + 1000
    return year

def normalize(text: str) -> str:
    s = _ERA_RE.sub(" ", text.strip())
    s = _WORD_RE.sub(" ", s)
    return _SPACE_RE.sub(" ", s).strip()

def _build(year: int, month: int, day: int) -> Optional[NepaliDate]:
    if not (1 <= month <= 12 and 1 <= day <= 32):
        return None
    try:
        return NepaliDate(year, month, day)
    except CalnepError:
        return None

def _numbers(text: str) -> List[int]:
    return [int(n) for n in _NUMBER_RE.findall(text)]


# ---------------------------------------------------------
# Strategies
# ---------------------------------------------------------

def _strict(text: str) -> Optional[NepaliDate]:
    ok, value = NepaliDate.try_parse(text)
    return value if ok else None

def _standard(text: str) -> Optional[NepaliDate]:
    parts = [p for p in _SPLIT_RE.split(text) if p]
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        return None
    a, b, c = (int(p) for p in parts)
    for y, m, d in ((a, b, c), (c, b, a), (c, a, b)):
        out = _build(expand_year(y), m, d)
        if out is not None:
            return out
    return None

def _devanagari(text: str) -> Optional[NepaliDate]:
    converted = to_ascii_digits(text)
    if converted == text:
        return None
    ok, value = try_parse(converted)
    return value if ok else None

def _month_name(text: str) -> Optional[NepaliDate]:
    lowered = text.replace(",", " ").lower()
    for alias, month in MONTH_ALIASES:
        i = lowered.find(alias)
        if i < 0:
            continue
        nums = _numbers(lowered[:i] + " " + lowered[i + len(alias):])
        if len(nums) < 2:
            continue
        if nums[0] > 1900:
            year, day = nums[0], nums[1]
        elif nums[1] > 1900:
            year, day = nums[1], nums[0]
        else:
            ranked = sorted(nums, reverse=True)
            year, day = expand_year(ranked[0]), ranked[1]
        out = _build(year, month, day)
        if out is not None:
            return out
    return None

def _ambiguous(text: str) -> Optional[NepaliDate]:
    nums = _numbers(text)
    if len(nums) != 3:
        return None
    for yi, mi, di in _PERMUTATIONS:
        out = _build(expand_year(nums[yi]), nums[mi], nums[di])
        if out is not None:
            return out
    return None


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("standard", _standard),
    ("devanagari", _devanagari),
    ("month-name", _month_name),
    ("ambiguous", _ambiguous),
)


def parse(text: Optional[str]) -> NepaliDate:
    """
    Parse a Nepali date written in almost any common way.

    Examples that all give 2080/04/15:
      '2080/04/15', '15-04-2080', '15 Shrawan 2080', 'Shrawan 15, 2080',
      '१५ साउन २०८०', '15 Shrawan 2080 B.S.'

    Raises InvalidFormatError when nothing matches.
    """
    if text is None or not text.strip():
        raise InvalidFormatError("Input string cannot be empty")

    out = _strict(text)
    if out is not None:
        log.debug("Parsed %r with strategy 'strict'", text)
        return out

    s = normalize(text)
    for name, fn in STRATEGIES:
        out = fn(s)
        if out is not None:
            log.debug("Parsed %r with strategy %r", text, name)
            return out

    raise InvalidFormatError(f"Could not parse {text!r} as a Nepali date")

def try_parse(text: Optional[str]) -> Tuple[bool, Optional[NepaliDate]]:
    try:
        return True, parse(text)
    except CalnepError:
        return False, None
