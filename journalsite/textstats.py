"""
Word statistics for the stats page.

Pipeline per entry: normalize_entry -> tokenize -> filter_stopwords.
Across entries: aggregate() builds the totals, frequency tables and the
per-word monthly series; rank_spiky() / rank_hottest() rank those series.
"""
import re
from collections import Counter
from dataclasses import dataclass, field

from journalsite.cleaning import normalize_entry

TREND_MIN_COUNT = 10
HOTTEST_LIMIT = 50

FENCED_CODE_RE = re.compile(r"```[\s\S]*?```")
INLINE_CODE_RE = re.compile(r"`[^`]*`")
IMAGE_RE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
LINK_RE = re.compile(r"\[[^\]]*\]\([^)]*\)")
CURLY_APOSTROPHE_RE = re.compile(r"[‘’]")
NON_WORD_RE = re.compile(r"[^a-z0-9\s']")
NUMERIC_RE = re.compile(r"^[0-9]+$")

STOPWORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "if", "then", "else", "when", "at", "by",
    "for", "in", "of", "on", "to", "up", "with", "is", "it", "as", "be", "can", "did",
    "do", "does", "doing", "done", "from", "had", "has", "have", "i", "me", "my", "we",
    "our", "you", "your", "he", "she", "they", "them", "their", "this", "that",
    "these", "those", "so", "not", "no", "yes", "just", "than", "too", "very", "are",
    "was", "were", "will", "would", "could", "should", "about", "after", "again",
    "against", "all", "am", "any", "because", "been", "before", "being", "between",
    "both", "into", "over", "under", "out", "off", "only", "own", "same", "some",
    "such", "what", "which", "who", "whom", "why", "how", "there", "here", "where",
    "also",
])


# -----------------------
# Tokens
# -----------------------

def tokenize(text: str):
    """Yield lowercase word tokens, skipping code, images and links."""
    text = FENCED_CODE_RE.sub(" ", text or "")
    text = INLINE_CODE_RE.sub(" ", text)
    text = IMAGE_RE.sub(" ", text)
    text = LINK_RE.sub(" ", text)
    text = CURLY_APOSTROPHE_RE.sub("'", text.lower())
    text = NON_WORD_RE.sub(" ", text)
    for token in text.split():
        yield token


def filter_stopwords(tokens) -> list:
    return [t for t in tokens if len(t) > 1 and t.lower() not in STOPWORDS]


def text_words(normalized_text: str) -> list:
    """Filtered tokens of text that has already been through normalize_entry."""
    return filter_stopwords(tokenize(normalized_text))


def entry_words(raw_text: str) -> list:
    """Filtered tokens of a raw (not yet normalized) entry."""
    return text_words(normalize_entry(raw_text))


def is_numeric(word: str) -> bool:
    return NUMERIC_RE.match(word) is not None


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


# -----------------------
# Aggregation
# -----------------------

@dataclass
class CorpusStats:
    """Everything the stats page needs, computed once per build."""

    entry_counts: list = field(default_factory=list)   # [(slug, count)]
    total_words: int = 0
    unique_words: int = 0
    by_year: list = field(default_factory=list)        # [(year, total)]
    by_month: list = field(default_factory=list)       # [("YYYY-MM", total)]
    overall: Counter = field(default_factory=Counter)
    per_year: dict = field(default_factory=dict)       # {year: Counter}
    months: list = field(default_factory=list)         # Month Index
    word_months: dict = field(default_factory=dict)    # {word: [count per month]}


def build_month_index(entries) -> list:
    return sorted({month_key(e["year"], e["month"]) for e in entries})


def aggregate(entries) -> CorpusStats:
    """
    Reduce entries (dicts with slug, year, month and filtered words) to
    corpus-wide statistics.
    """
    entries = list(entries)
    months = build_month_index(entries)
    position = {key: i for i, key in enumerate(months)}

    stats = CorpusStats(months=months)
    year_totals = Counter()
    month_totals = Counter()

    for e in entries:
        words = e["words"]
        key = month_key(e["year"], e["month"])
        idx = position[key]

        stats.entry_counts.append((e["slug"], len(words)))
        year_totals[e["year"]] += len(words)
        month_totals[key] += len(words)

        year_counter = stats.per_year.setdefault(e["year"], Counter())
        for w in words:
            stats.overall[w] += 1
            year_counter[w] += 1
            series = stats.word_months.get(w)
            if series is None:
                series = stats.word_months[w] = [0] * len(months)
            series[idx] += 1

    stats.total_words = sum(count for _, count in stats.entry_counts)
    stats.unique_words = sum(1 for w in stats.overall if not is_numeric(w))
    stats.by_year = sorted(year_totals.items())
    stats.by_month = sorted(month_totals.items())
    return stats


def top_words(overall: Counter, min_count: int = 10, limit=None) -> list:
    """[(word, count)] with count >= min_count, most frequent first."""
    rows = sorted(
        ((w, c) for w, c in overall.items() if c >= min_count),
        key=lambda wc: (-wc[1], wc[0]),
    )
    return rows if limit is None else rows[:limit]


def hapax_legomena(overall: Counter) -> list:
    return sorted(w for w, c in overall.items() if c == 1)


# -----------------------
# Trends
# -----------------------

def eligible_series(word_months: dict, min_count: int = TREND_MIN_COUNT) -> dict:
    """
    Drop the first (usually partial) month of every series and keep the
    words that still occur at least min_count times.
    """
    eligible = {}
    for word, series in word_months.items():
        trimmed = list(series[1:])
        if sum(trimmed) >= min_count:
            eligible[word] = trimmed
    return eligible


def variance(values) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((x - mean) * (x - mean) for x in values) / len(values)


def rank_spiky(word_months: dict, min_count: int = TREND_MIN_COUNT) -> list:
    """Eligible words, highest monthly variance first (ties by word)."""
    rows = [
        {"word": word, "total": sum(series), "variance": variance(series), "series": series}
        for word, series in eligible_series(word_months, min_count).items()
    ]
    rows.sort(key=lambda r: (-r["variance"], r["word"]))
    return rows


def hottest_window(month_count: int) -> int:
    return min(3, max(1, month_count // 8))


def rank_hottest(
    word_months: dict,
    month_count: int,
    min_count: int = TREND_MIN_COUNT,
    limit: int = HOTTEST_LIMIT,
) -> list:
    """
    Words whose last `window` months beat the `window` months before them.

    month_count is the length of the Month Index; the previous window only
    counts when the index holds at least two windows.
    """
    window = hottest_window(month_count)
    have_prev = month_count >= 2 * window

    rows = []
    for word, series in eligible_series(word_months, min_count).items():
        n = len(series)
        recent = sum(series[max(0, n - window):])
        prev = sum(series[max(0, n - 2 * window):max(0, n - window)]) if have_prev else 0
        delta = recent - prev
        if delta > 0:
            rows.append({"word": word, "prev": prev, "recent": recent, "delta": delta, "series": series})

    rows.sort(key=lambda r: (-r["delta"], r["word"]))
    return rows[:limit]
