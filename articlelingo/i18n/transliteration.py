"""
Script-to-Latin transliteration for slugs.

One data-driven table per script behind a common Transliterator interface.
Transliteration maps characters, it does not translate meaning.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from abc import ABC, abstractmethod

from articlelingo.core.utils import content_hash

logger = logging.getLogger(__name__)


class Transliterator(ABC):
    """Maps text in one script to Latin characters."""

    script: str = ""

    @abstractmethod
    def transliterate(self, text: str) -> str:
        """Return text with this script's characters replaced by Latin ones."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(script={self.script})>"


class TableTransliterator(Transliterator):
    """Longest-match substitution over a character/cluster table."""

    def __init__(self, script: str, table: dict[str, str]):
        self.script = script
        self.table = table
        self._max_key = max((len(k) for k in table), default=1)

    def transliterate(self, text: str) -> str:
        out: list[str] = []
        i = 0
        while i < len(text):
            for size in range(min(self._max_key, len(text) - i), 0, -1):
                piece = text[i:i + size]
                if piece in self.table:
                    out.append(self.table[piece])
                    i += size
                    break
            else:
                out.append(text[i])
                i += 1
        return "".join(out)


# =============================================================================
# Cyrillic (Russian, with Ukrainian extras)
# =============================================================================


CYRILLIC_LOWER: dict[str, str] = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d",
    "е": "e", "ё": "yo", "ж": "zh", "з": "z", "и": "i",
    "й": "y", "к": "k", "л": "l", "м": "m", "н": "n",
    "о": "o", "п": "p", "р": "r", "с": "s", "т": "t",
    "у": "u", "ф": "f", "х": "h", "ц": "ts", "ч": "ch",
    "ш": "sh", "щ": "sch", "ъ": "", "ы": "y", "ь": "",
    "э": "e", "ю": "yu", "я": "ya",
    # Ukrainian
    "є": "ye", "і": "i", "ї": "yi", "ґ": "g",
}

CYRILLIC_TABLE: dict[str, str] = {
    **CYRILLIC_LOWER,
    **{k.upper(): v.capitalize() for k, v in CYRILLIC_LOWER.items()},
}


# =============================================================================
# Arabic (with Persian/Urdu letters)
# =============================================================================


ARABIC_TABLE: dict[str, str] = {
    "ا": "a", "أ": "a", "إ": "i", "آ": "a",
    "ب": "b", "ت": "t", "ث": "th", "ج": "j",
    "ح": "h", "خ": "kh", "د": "d", "ذ": "dh",
    "ر": "r", "ز": "z", "س": "s", "ش": "sh",
    "ص": "s", "ض": "d", "ط": "t", "ظ": "z",
    "ع": "a", "غ": "gh", "ف": "f", "ق": "q",
    "ك": "k", "ل": "l", "م": "m", "ن": "n",
    "ه": "h", "و": "w", "ي": "y", "ى": "a",
    "ة": "h", "ء": "a", "ؤ": "u", "ئ": "i",
    # Short vowels and tanwin
    "َ": "a", "ِ": "i", "ُ": "u",
    "ً": "an", "ٍ": "in", "ٌ": "un",
    "ّ": "", "ْ": "",
    # Persian/Urdu
    "پ": "p", "چ": "ch", "ژ": "zh", "گ": "g", "ک": "k", "ی": "y",
    # Arabic-Indic digits
    "٠": "0", "١": "1", "٢": "2", "٣": "3", "٤": "4",
    "٥": "5", "٦": "6", "٧": "7", "٨": "8", "٩": "9",
    # Punctuation
    "،": ",", "؟": "?", "؛": ";",
}

_ARABIC_DIACRITICS_RE = re.compile(r"[\u064b-\u065f\u0640]")


class ArabicTransliterator(TableTransliterator):
    """Table substitution, then strips any remaining diacritics and tatweel."""

    def __init__(self, table: dict[str, str] = ARABIC_TABLE):
        super().__init__("arabic", table)

    def transliterate(self, text: str) -> str:
        return _ARABIC_DIACRITICS_RE.sub("", super().transliterate(text))


# =============================================================================
# Devanagari (Hindi)
# =============================================================================


DEVANAGARI_VOWELS: dict[str, str] = {
    "अ": "a", "आ": "aa", "इ": "i", "ई": "ii",
    "उ": "u", "ऊ": "uu", "ऋ": "ri", "ॠ": "rii",
    "ए": "e", "ऐ": "ai", "ओ": "o", "औ": "au",
}

# Bare consonants; the inherent vowel is added by the transliterator
DEVANAGARI_CONSONANTS: dict[str, str] = {
    "क": "k", "ख": "kh", "ग": "g", "घ": "gh", "ङ": "ng",
    "च": "ch", "छ": "chh", "ज": "j", "झ": "jh", "ञ": "ny",
    "ट": "t", "ठ": "th", "ड": "d", "ढ": "dh", "ण": "n",
    "त": "t", "थ": "th", "द": "d", "ध": "dh", "न": "n",
    "प": "p", "फ": "ph", "ब": "b", "भ": "bh", "म": "m",
    "य": "y", "र": "r", "ल": "l", "व": "v",
    "श": "sh", "ष": "sh", "स": "s", "ह": "h",
}

# Consonant + nukta
DEVANAGARI_NUKTA_CONSONANTS: dict[str, str] = {
    "क": "q", "ख": "kh", "ग": "gh", "ज": "z",
    "ड": "r", "ढ": "rh", "फ": "f", "य": "y",
}

# Clusters with a conventional reading
DEVANAGARI_CLUSTERS: dict[str, str] = {
    "क्ष": "ksh",
    "त्र": "tr",
    "ज्ञ": "gy",
    "श्र": "shr",
}

DEVANAGARI_MATRAS: dict[str, str] = {
    "ा": "aa", "ि": "i", "ी": "ii", "ु": "u", "ू": "uu",
    "ृ": "ri", "ॄ": "rii", "े": "e", "ै": "ai", "ो": "o", "ौ": "au",
}

DEVANAGARI_SIGNS: dict[str, str] = {
    "ं": "n", "ँ": "n", "ः": "h", "ऽ": "",
    "०": "0", "१": "1", "२": "2", "३": "3", "४": "4",
    "५": "5", "६": "6", "७": "7", "८": "8", "९": "9",
    "।": ".", "॥": ".",
}

VIRAMA = "्"
NUKTA = "़"


class DevanagariTransliterator(Transliterator):
    """
    Consonant/vowel/matra transliteration.

    A consonant takes its inherent 'a' unless followed by a matra or a
    virama, or it closes a word of more than one syllable.
    """

    script = "devanagari"

    def transliterate(self, text: str) -> str:
        out: list[str] = []
        word_started = False
        i = 0
        n = len(text)

        while i < n:
            char = text[i]

            cluster = next(
                (c for c in DEVANAGARI_CLUSTERS if text.startswith(c, i)),
                None,
            )
            if cluster is not None or char in DEVANAGARI_CONSONANTS:
                if cluster is not None:
                    latin = DEVANAGARI_CLUSTERS[cluster]
                    i += len(cluster)
                elif i + 1 < n and text[i + 1] == NUKTA and char in DEVANAGARI_NUKTA_CONSONANTS:
                    latin = DEVANAGARI_NUKTA_CONSONANTS[char]
                    i += 2
                else:
                    latin = DEVANAGARI_CONSONANTS[char]
                    i += 1

                following = text[i] if i < n else ""
                if following in DEVANAGARI_MATRAS:
                    latin += DEVANAGARI_MATRAS[following]
                    i += 1
                elif following == VIRAMA:
                    i += 1
                elif word_started and not self._continues_word(following):
                    pass  # final schwa deletion
                else:
                    latin += "a"

                out.append(latin)
                word_started = True
                continue

            if char in DEVANAGARI_VOWELS:
                out.append(DEVANAGARI_VOWELS[char])
                word_started = True
            elif char in DEVANAGARI_SIGNS:
                out.append(DEVANAGARI_SIGNS[char])
            elif char in DEVANAGARI_MATRAS:
                # Stray matra
                out.append(DEVANAGARI_MATRAS[char])
            elif char in (VIRAMA, NUKTA):
                pass
            else:
                out.append(char)
                word_started = False
            i += 1

        return "".join(out)

    @staticmethod
    def _continues_word(char: str) -> bool:
        return bool(char) and "\u0900" <= char <= "\u097f" and char not in "।॥"


# =============================================================================
# Chinese (curated pinyin dictionary)
# =============================================================================


PINYIN_DICTIONARY: dict[str, str] = {
    # Compounds
    "中国": "zhongguo", "外国": "waiguo", "法国": "faguo", "美国": "meiguo",
    "英国": "yingguo", "德国": "deguo", "日本": "riben", "欧洲": "ouzhou",
    "移民": "yimin", "签证": "qianzheng", "护照": "huzhao", "居留": "juliu",
    "工作": "gongzuo", "学习": "xuexi", "公司": "gongsi", "新闻": "xinwen",
    "指南": "zhinan", "服务": "fuwu", "律师": "lvshi", "银行": "yinhang",
    "保险": "baoxian", "医院": "yiyuan", "医疗": "yiliao", "税务": "shuiwu",
    "生活": "shenghuo", "租房": "zufang", "教育": "jiaoyu", "大学": "daxue",
    "手续": "shouxu", "申请": "shenqing", "文件": "wenjian", "费用": "feiyong",
    "如何": "ruhe", "什么": "shenme", "问题": "wenti", "信息": "xinxi",
    "国际": "guoji", "市场": "shichang", "企业": "qiye", "经济": "jingji",
    "旅游": "lvyou", "健康": "jiankang", "家庭": "jiating", "孩子": "haizi",
    "城市": "chengshi", "国家": "guojia", "政府": "zhengfu", "法律": "falv",
    # Single characters
    "中": "zhong", "国": "guo", "人": "ren", "的": "de",
    "我": "wo", "你": "ni", "他": "ta", "她": "ta",
    "们": "men", "这": "zhe", "那": "na", "里": "li",
    "是": "shi", "不": "bu", "了": "le", "在": "zai",
    "有": "you", "个": "ge", "和": "he", "好": "hao",
    "大": "da", "小": "xiao", "年": "nian", "月": "yue",
    "日": "ri", "天": "tian", "上": "shang", "下": "xia",
    "来": "lai", "去": "qu", "说": "shuo", "看": "kan",
    "要": "yao", "会": "hui", "能": "neng", "得": "de",
    "可": "ke", "以": "yi", "为": "wei", "到": "dao",
    "没": "mei", "就": "jiu", "都": "dou", "对": "dui",
    "生": "sheng", "活": "huo", "作": "zuo", "工": "gong",
    "家": "jia", "学": "xue", "校": "xiao", "文": "wen",
    "法": "fa", "律": "lv", "师": "shi", "服": "fu",
    "务": "wu", "公": "gong", "司": "si", "钱": "qian",
    "元": "yuan", "价": "jia", "格": "ge", "买": "mai",
    "卖": "mai", "商": "shang", "业": "ye", "行": "xing",
    "银": "yin", "保": "bao", "险": "xian", "医": "yi",
    "院": "yuan", "房": "fang", "车": "che", "站": "zhan",
    "路": "lu", "门": "men", "城": "cheng", "市": "shi",
    "新": "xin", "闻": "wen", "指": "zhi", "南": "nan",
    "北": "bei", "东": "dong", "西": "xi", "外": "wai",
    "多": "duo", "少": "shao", "时": "shi", "间": "jian",
    "地": "di", "方": "fang", "税": "shui", "签": "qian",
    "证": "zheng", "护": "hu", "照": "zhao", "居": "ju",
    "留": "liu", "民": "min", "移": "yi", "美": "mei",
    "英": "ying", "德": "de", "法国人": "faguoren",
    "最": "zui", "佳": "jia", "如": "ru", "何": "he",
    "找": "zhao", "租": "zu", "住": "zhu", "开": "kai",
    "办": "ban", "理": "li", "手": "shou", "续": "xu",
    "申": "shen", "请": "qing", "费": "fei", "用": "yong",
}

# CJK Unified Ideographs + Extension A
HAN_RE = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff]")


class ChineseTransliterator(Transliterator):
    """
    Dictionary romanization with an explicit fallback.

    Mapped words become space-separated pinyin tokens (longest match first).
    Each run of unmapped Han characters is first tried with an ASCII
    transliteration; if that yields nothing the run becomes a stable
    hash-derived token ``x<8 hex>``.
    """

    script = "chinese"

    def __init__(self, dictionary: dict[str, str] | None = None):
        self.dictionary = dict(PINYIN_DICTIONARY if dictionary is None else dictionary)
        self._max_key = max((len(k) for k in self.dictionary), default=1)

    def transliterate(self, text: str) -> str:
        out: list[str] = []
        unmapped: list[str] = []
        i = 0

        while i < len(text):
            match = self._match_at(text, i)
            if match is not None:
                if unmapped:
                    out.append(f" {self.fallback_token(''.join(unmapped))} ")
                    unmapped = []
                out.append(f" {self.dictionary[match]} ")
                i += len(match)
            elif HAN_RE.match(text[i]):
                unmapped.append(text[i])
                i += 1
            else:
                if unmapped:
                    out.append(f" {self.fallback_token(''.join(unmapped))} ")
                    unmapped = []
                out.append(text[i])
                i += 1

        if unmapped:
            out.append(f" {self.fallback_token(''.join(unmapped))} ")

        return re.sub(r" {2,}", " ", "".join(out)).strip()

    def _match_at(self, text: str, i: int) -> str | None:
        for size in range(min(self._max_key, len(text) - i), 0, -1):
            piece = text[i:i + size]
            if piece in self.dictionary:
                return piece
        return None

    def fallback_token(self, run: str) -> str:
        """Token for a run of unmapped characters. Pure function of run."""
        ascii_form = unicodedata.normalize("NFKD", run).encode("ascii", "ignore").decode("ascii")
        ascii_form = re.sub(r"[^A-Za-z0-9]+", "", ascii_form)
        if ascii_form:
            return ascii_form
        logger.debug(f"Unmapped Chinese characters, using hash token for {run!r}")
        return "x" + content_hash(run, algorithm="sha1")[:8]


# =============================================================================
# Registry
# =============================================================================


TRANSLITERATORS: dict[str, Transliterator] = {
    "cyrillic": TableTransliterator("cyrillic", CYRILLIC_TABLE),
    "arabic": ArabicTransliterator(),
    "devanagari": DevanagariTransliterator(),
    "chinese": ChineseTransliterator(),
}


def get_transliterator(script: str) -> Transliterator | None:
    return TRANSLITERATORS.get(script)
