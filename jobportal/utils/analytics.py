# jobportal/utils/analytics.py
"""
Small pure helpers shared by the dashboard and stats queries.

Kept free of database access so the rounding and bucketing rules can be
tested on their own.
"""
import math
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from jobportal.database import as_utc

SKILL_VOCABULARY = [
    "JavaScript", "TypeScript", "React", "Node.js", "Python", "Java", "SQL",
    "AWS", "Docker", "Kubernetes", "Git", "MongoDB", "PostgreSQL", "Express",
    "Next.js", "Vue.js", "Angular", "PHP", "C++", "C#", ".NET", "Spring Boot",
    "HTML", "CSS", "Bootstrap", "Tailwind", "Redux", "GraphQL",
]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(count: int, total: int) -> int:
    """round(100 * count / total), 0 when there is nothing to divide by"""
    if not total:
        return 0
    return round_half_up(100 * count / total)


def percentage_change(current: int, previous: int) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 2)


def trend(current: int, previous: int) -> str:
    if current > previous:
        return "up"
    if current < previous:
        return "down"
    return "stable"


def month_key(value: datetime) -> str:
    """YYYY-MM bucket; lexicographic order is chronological"""
    return as_utc(value).strftime("%Y-%m")


def last_month_keys(count: int, now: Optional[datetime] = None) -> List[str]:
    """The ``count`` month buckets ending with the current month, oldest first"""
    now = now or datetime.now(timezone.utc)
    year, month = now.year, now.month
    keys = []
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def month_start(now: Optional[datetime] = None, months_back: int = 0) -> datetime:
    now = now or datetime.now(timezone.utc)
    year, month = now.year, now.month - months_back
    while month <= 0:
        year, month = year - 1, month + 12
    return datetime(year, month, 1, tzinfo=timezone.utc)


def time_ago(value: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    seconds = int((now - as_utc(value)).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{days} day{'s' if days != 1 else ''} ago"
    if hours > 0:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    if minutes > 0:
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    return "just now"


def count_skills(texts: Iterable[str], vocabulary: Iterable[str] = SKILL_VOCABULARY) -> Counter:
    """Count, per vocabulary entry, the texts that mention it.

    Matching is a case-insensitive substring check, so "Java" also counts
    every text that mentions "JavaScript".
    """
    vocabulary = list(vocabulary)
    counts = Counter()
    for text in texts:
        lowered = (text or "").lower()
        for skill in vocabulary:
            if skill.lower() in lowered:
                counts[skill] += 1
    return counts


def top_skills(texts: Iterable[str], limit: int = 5) -> List[dict]:
    return [
        {"skill": skill, "count": count}
        for skill, count in count_skills(texts).most_common(limit)
    ]
