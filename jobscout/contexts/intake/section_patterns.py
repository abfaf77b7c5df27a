"""
Pattern matching for job posting section identification.

This module locates labeled sections (requirements, responsibilities,
benefits, preferred qualifications) in plain-text postings and splits
section bodies into bullet items.

Pattern classes follow the same convention as extraction_patterns.py:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from jobscout.utils.text_processing import contains_term, enclosing_line

# =============================================================================
# SECTION BOUNDARY PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SectionBoundaryPatterns:
    """
    Regex patterns for detecting section header lines.

    A header is a capitalized label ending in a colon ("What You'll Do:")
    or a short ALL-CAPS line ("EXPERIENCE").
    """

    # Start of the next header line; search from the end of the current header line
    NEXT_HEADER: re.Pattern = re.compile(
        r"\n[^\S\n]*(?:[A-Z][A-Za-z'’/& -]*[:：]|[A-Z][A-Z&/ -]+[^\S\n]*(?=\n|$))"
    )

    # Whole-line header test (applied to a stripped line)
    HEADER_LINE: re.Pattern = re.compile(r"^(?:[^:：]{1,60}[:：]|[A-Z][A-Z&/' -]{2,60})$")

    BLANK_LINE: re.Pattern = re.compile(r"\n[^\S\n]*\n")


# Maximum header length accepted when preferring labeled lines over body mentions
MAX_HEADER_LENGTH = 60


# =============================================================================
# SECTION PRESENCE HINTS (for parse quality)
# =============================================================================


@dataclass(frozen=True)
class SectionHintPatterns:
    """
    Loose patterns that indicate a posting has a given section at all.

    These feed the parse-quality assessment and are deliberately broader
    than the keyword lists used to bound a section.
    """

    REQUIREMENTS: tuple = (
        r"requirements",
        r"qualifications",
        r"must have",
        r"skills required",
        r"what you.{1,20}need",
        r"who you are",
    )

    RESPONSIBILITIES: tuple = (
        r"responsibilities",
        r"what you.{1,20}do",
        r"about the role",
        r"job description",
        r"duties",
        r"your role",
    )


def has_requirements_section(text: str) -> bool:
    return any(re.search(p, text, re.IGNORECASE) for p in SectionHintPatterns.REQUIREMENTS)


def has_responsibilities_section(text: str) -> bool:
    return any(re.search(p, text, re.IGNORECASE) for p in SectionHintPatterns.RESPONSIBILITIES)


# =============================================================================
# BULLET PATTERNS
# =============================================================================


@dataclass(frozen=True)
class BulletPatterns:
    """
    Regex patterns for bullet items, applied to one line at a time.

    Group 1 is the bullet text without its marker.
    """

    SYMBOL: re.Pattern = re.compile(r"^\s*[•●○■□▪▸▹►▻◆◇★☆✓✔✗✘➤➢→⭐🔹🔸*·]\s*(.+)$")
    DASH: re.Pattern = re.compile(r"^\s*[-–—]\s*(.+)$")
    NUMBERED: re.Pattern = re.compile(r"^\s*\d+[.)]\s*(.+)$")
    LETTERED: re.Pattern = re.compile(r"^\s*[a-zA-Z][.)]\s+(.+)$")

    # Unbulleted lines that still read like a requirement
    REQUIREMENT_LEAD: re.Pattern = re.compile(
        r"^(?:experience|proficiency|knowledge|ability|familiarity|understanding|expertise)",
        re.IGNORECASE,
    )
    YEARS_MENTION: re.Pattern = re.compile(r"\d+\+?\s*years?", re.IGNORECASE)


BULLET_PATTERNS = [
    BulletPatterns.SYMBOL,
    BulletPatterns.DASH,
    BulletPatterns.NUMBERED,
    BulletPatterns.LETTERED,
]

MIN_BULLET_LENGTH = 10
MIN_REQUIREMENT_LINE_LENGTH = 20


# =============================================================================
# RESPONSIBILITY CUES
# =============================================================================

RESPONSIBILITY_VERBS = (
    "develop",
    "build",
    "design",
    "implement",
    "maintain",
    "collaborate",
    "lead",
    "manage",
    "create",
    "work with",
    "ensure",
    "support",
    "review",
    "write",
    "participate",
)

RESPONSIBILITY_LEAD = re.compile(r"^(?:you\s+will|you'll|you’ll|as\s+a)\b", re.IGNORECASE)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


@dataclass(frozen=True)
class Section:
    """A bounded region of the posting: text[start:end] == content."""

    content: str
    start: int
    end: int


def find_section(text: str, keywords: Iterable[str]) -> Optional[Section]:
    """
    Locate a section by keyword and bound it at the next header line.

    Keywords are tried in order. For each keyword a header-like line
    ("Minimum Requirements:") is preferred over a mention in body text
    ("... FDA regulatory requirements"). The section starts at the
    beginning of the matched line and ends just before the next header
    line, or at end of text.

    Args:
        text: Full posting text
        keywords: Section labels, most specific first

    Returns:
        Section, or None when no keyword occurs
    """
    lowered = text.lower()
    for keyword in keywords:
        index = _header_index(text, keyword)
        if index is None:
            index = lowered.find(keyword.lower())
            if index == -1:
                continue

        start, line_end = enclosing_line(text, index)
        boundary = SectionBoundaryPatterns.NEXT_HEADER.search(text, line_end)
        end = boundary.start() if boundary else len(text)
        return Section(content=text[start:end], start=start, end=end)

    return None


def find_preferred_section(text: str, keywords: Iterable[str]) -> Optional[Section]:
    """
    Locate the nice-to-have section.

    Only a line that starts with a preferred keyword opens the section, so
    "(PostgreSQL preferred)" inside a requirement bullet does not. The
    section runs to the next blank line or next header, whichever is first.
    """
    for keyword in keywords:
        pattern = re.compile(rf"(?:^|\n)[^\S\n]*{re.escape(keyword)}[:：\s]", re.IGNORECASE)
        match = pattern.search(text)
        if not match:
            continue

        start = match.start() + (1 if text[match.start()] == "\n" else 0)
        _, line_end = enclosing_line(text, start)
        candidates = [len(text)]
        for boundary_pattern in (
            SectionBoundaryPatterns.BLANK_LINE,
            SectionBoundaryPatterns.NEXT_HEADER,
        ):
            boundary = boundary_pattern.search(text, line_end)
            if boundary:
                candidates.append(boundary.start())
        end = min(candidates)
        return Section(content=text[start:end], start=start, end=end)

    return None


def extract_bullets(text: str) -> list[str]:
    """
    Split a section body into bullet items, in document order.

    Recognizes symbol, dash, numbered and lettered bullets, plus unbulleted
    lines that read like requirements ("Experience with ...", "5+ years ...").
    """
    bullets: list[str] = []
    seen = set()

    for raw_line in text.splitlines():
        line = raw_line.strip()
        item = None

        for pattern in BULLET_PATTERNS:
            match = pattern.match(line)
            if match:
                candidate = match.group(1).strip()
                if len(candidate) > MIN_BULLET_LENGTH:
                    item = candidate
                break

        if item is None and len(line) > MIN_REQUIREMENT_LINE_LENGTH:
            if BulletPatterns.REQUIREMENT_LEAD.match(line) or BulletPatterns.YEARS_MENTION.search(
                line
            ):
                item = line

        if item and item not in seen:
            seen.add(item)
            bullets.append(item)

    return bullets


def is_responsibility(bullet: str) -> bool:
    """Check whether a bullet describes a duty rather than a perk or requirement."""
    lowered = bullet.lower()
    return any(verb in lowered for verb in RESPONSIBILITY_VERBS) or bool(
        RESPONSIBILITY_LEAD.match(bullet)
    )


def _header_index(text: str, keyword: str) -> Optional[int]:
    """Offset of keyword within the first header-like line that contains it."""
    for match in re.finditer(r"[^\n]+", text):
        line = match.group(0).strip()
        if len(line) > MAX_HEADER_LENGTH or not SectionBoundaryPatterns.HEADER_LINE.match(line):
            continue
        if contains_term(line, keyword):
            offset = match.group(0).lower().find(keyword.lower())
            if offset != -1:
                return match.start() + offset
    return None
