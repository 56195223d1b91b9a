import re
from dataclasses import dataclass, field
from typing import Iterable

STOP_WORDS = frozenset(
    {"and", "or", "the", "in", "on", "at", "to", "for", "with", "a", "an"}
)

MIN_KEYWORD_LENGTH = 3

_PUNCTUATION = re.compile(r"[^\w\s]")


def extract_keywords(text: str | None) -> list[str]:
    """Turn free text into a de-duplicated list of keywords.

    Lower-cases, strips punctuation, splits on whitespace and drops
    short tokens and stop words. The result keeps first-seen order
    so it can be used anywhere an ordered set is expected.
    """
    if not text:
        return []

    cleaned = _PUNCTUATION.sub("", text.lower())
    tokens = (
        token
        for token in cleaned.split()
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOP_WORDS
    )
    return list(dict.fromkeys(tokens))


def find_missing_skills(
    job_keywords: Iterable[str], resume_keywords: Iterable[str]
) -> list[str]:
    """Job keywords that never appear in the resume, in job order."""
    present = set(resume_keywords)
    return [keyword for keyword in dict.fromkeys(job_keywords) if keyword not in present]


@dataclass
class SkillGap:
    """Keyword comparison between a job description and a resume."""
    job_keywords: list[str]
    resume_keywords: list[str]
    missing: list[str] = field(default_factory=list)

    @property
    def matched(self) -> list[str]:
        missing = set(self.missing)
        return [keyword for keyword in self.job_keywords if keyword not in missing]

    @property
    def match_pct(self) -> float:
        if not self.job_keywords:
            return 0
        return round(len(self.matched) / len(self.job_keywords) * 100, 1)


def analyze_gap(job_text: str | None, resume_text: str | None) -> SkillGap:
    job_keywords = extract_keywords(job_text)
    resume_keywords = extract_keywords(resume_text)
    return SkillGap(
        job_keywords=job_keywords,
        resume_keywords=resume_keywords,
        missing=find_missing_skills(job_keywords, resume_keywords),
    )
