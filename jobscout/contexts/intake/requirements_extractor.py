"""
Requirement extraction for the Intake context.

Builds JobRequirements from posting text: skills and tools (each with an
evidence span), years of experience, expected seniority, education,
certifications and domain keywords. Responsibilities and benefits are
extracted here too since they share the section machinery.

Importance is never guessed. Items found in the requirements section are
critical; items found in the preferred section are nice_to_have, and an
item present in both is kept only as preferred.
"""

import re
from dataclasses import dataclass
from typing import Optional

from jobscout.config.schema import JobDiscoveryConfig, SeniorityMappings
from jobscout.contexts.intake.job_data_structure import (
    EvidenceSpan,
    ExtractedField,
    Importance,
    JobRequirements,
    Seniority,
)
from jobscout.contexts.intake.section_patterns import (
    Section,
    extract_bullets,
    find_preferred_section,
    find_section,
    is_responsibility,
)
from jobscout.contexts.intake.skill_catalog import (
    CASE_SENSITIVE_TERMS,
    CERTIFICATIONS,
    DOMAIN_KEYWORDS,
    EDUCATION_PATTERNS,
    KNOWN_SKILLS,
    KNOWN_TOOLS,
    MAX_EDUCATION_LENGTH,
    NON_SKILL_WORDS,
    UPPERCASE_DOMAIN_TERMS,
    display_name,
    is_known_skill,
    is_known_tool,
    looks_like_skill,
    mentions_term,
)
from jobscout.utils.text_processing import contains_term, enclosing_line, term_pattern

MAX_RESPONSIBILITIES = 15
MAX_BENEFITS = 10
MAX_EVIDENCE_QUOTE = 200
EVIDENCE_CONFIDENCE = 0.9

MAX_YEARS = 30
# Upper bound assumed for an open-ended "N+ years"
OPEN_RANGE_SPREAD = 2

# Longest free-form candidate (in words) accepted from the pattern path
MAX_PATTERN_SKILL_WORDS = 3


@dataclass(frozen=True)
class ExperiencePatterns:
    """Regex patterns for years of experience and free-form skill phrases."""

    YEARS_RANGE: re.Pattern = re.compile(
        r"(\d+)\s*[-–—]\s*(\d+)\s*(?:years?|yrs?)", re.IGNORECASE
    )
    YEARS_SINGLE: tuple = (
        re.compile(r"(\d+)\+?\s*(?:years?|yrs?)", re.IGNORECASE),
        re.compile(r"minimum\s+(?:of\s+)?(\d+)\s*(?:years?|yrs?)", re.IGNORECASE),
        re.compile(r"at\s+least\s+(\d+)\s*(?:years?|yrs?)", re.IGNORECASE),
    )

    # "Experience with X, Y and Z" / "proficiency in X"
    SKILL_LIST: re.Pattern = re.compile(
        r"(?:experience|proficiency|expertise|knowledge)\s+(?:with|in)\s+([^\n]+)", re.IGNORECASE
    )
    # "strong communication skills"
    STRONG_SKILL: re.Pattern = re.compile(r"strong\s+([A-Za-z ]+?)\s+skills?", re.IGNORECASE)
    # "Python programming"
    PROGRAMMING: re.Pattern = re.compile(r"([A-Za-z+#]+)\s+programming", re.IGNORECASE)

    LIST_SEPARATORS: re.Pattern = re.compile(r"[,;/():]|\s+and\s+|\s+or\s+", re.IGNORECASE)


# =============================================================================
# ENTRY POINT
# =============================================================================


def extract_requirements(
    text: str,
    title: str,
    config: JobDiscoveryConfig,
    raw_text: Optional[str] = None,
) -> JobRequirements:
    """
    Extract JobRequirements from posting text.

    Args:
        text: Normalized posting text
        title: Resolved job title (first source for seniority)
        config: Loaded configuration (section keywords, seniority mappings)
        raw_text: Original text for evidence quotes (same length as text)

    Returns:
        JobRequirements with evidence-tagged skills and tools
    """
    keywords = config.requirements_extraction
    quote_source = raw_text if raw_text is not None and len(raw_text) == len(text) else text

    required_section = find_section(text, keywords.skill_section_keywords)
    preferred_section = find_preferred_section(text, keywords.preferred_keywords)

    if required_section is not None:
        required_region = required_section
    else:
        required_region = Section(content=text, start=0, end=len(text))

    # The preferred block is excluded from the required scan when it sits inside it
    required_skills, required_tools = _extract_items(
        required_region, quote_source, "critical", exclude=preferred_section
    )
    preferred_skills, preferred_tools = [], []
    if preferred_section is not None:
        preferred_skills, preferred_tools = _extract_items(
            preferred_section, quote_source, "nice_to_have"
        )

    preferred_names = {item.normalized_name for item in preferred_skills + preferred_tools}
    required_skills = [s for s in required_skills if s.normalized_name not in preferred_names]
    required_tools = [t for t in required_tools if t.normalized_name not in preferred_names]

    # Years and seniority wording count only inside the requirements block
    years_min, years_max = extract_years_experience(required_region.content)
    seniority = detect_seniority(
        title, required_region.content, years_min, config.seniority_mappings
    )

    return JobRequirements(
        required_skills=required_skills,
        preferred_skills=preferred_skills,
        required_tools=required_tools,
        preferred_tools=preferred_tools,
        seniority_expected=seniority,
        years_experience_min=years_min,
        years_experience_max=years_max,
        education=extract_education(text),
        certifications=extract_certifications(text),
        domain_keywords=extract_domain_keywords(text),
        extraction_confidence=_extraction_confidence(
            required_section is not None, len(required_skills), len(required_tools)
        ),
        extraction_method="heuristic",
    )


def _extraction_confidence(has_section: bool, skill_count: int, tool_count: int) -> float:
    confidence = 0.5
    if has_section:
        confidence += 0.2
    if skill_count >= 3:
        confidence += 0.15
    if skill_count >= 5:
        confidence += 0.05
    if tool_count >= 2:
        confidence += 0.1
    return round(min(confidence, 1.0), 2)


# =============================================================================
# SKILLS AND TOOLS
# =============================================================================


def _extract_items(
    section: Section,
    quote_source: str,
    importance: Importance,
    exclude: Optional[Section] = None,
) -> tuple[list[ExtractedField], list[ExtractedField]]:
    """
    Skills and tools mentioned in a section, ordered by first appearance.

    Dictionary matches and pattern-path candidates merge into one list per
    kind, deduplicated by display name.
    """
    content = section.content
    if exclude is not None and section.start <= exclude.start < section.end:
        # Blank the excluded span so offsets stay aligned
        rel_start = exclude.start - section.start
        rel_end = min(exclude.end, section.end) - section.start
        content = content[:rel_start] + " " * (rel_end - rel_start) + content[rel_end:]

    hits: list[tuple[int, str, str]] = []  # (offset in section, display name, kind)
    spans: list[tuple[int, int]] = []
    for kind, vocabulary in (("skill", KNOWN_SKILLS), ("tool", KNOWN_TOOLS)):
        for term in vocabulary:
            match = _find_term(content, term)
            if match:
                hits.append((match.start(), display_name(term), kind))
                spans.append(match.span())

    for offset, candidate in _pattern_candidates(content):
        known = is_known_skill(candidate) or is_known_tool(candidate)
        # "CI" and "CD pipelines" split out of "CI/CD pipelines" belong to the dictionary hit
        if not known and any(start <= offset < end for start, end in spans):
            continue
        kind = "tool" if is_known_tool(candidate) else "skill"
        name = display_name(candidate) if known else candidate
        hits.append((offset, name, kind))

    skills: list[ExtractedField] = []
    tools: list[ExtractedField] = []
    seen = set()
    for offset, name, kind in sorted(hits, key=lambda hit: (hit[0], hit[1])):
        if name.lower() in seen:
            continue
        seen.add(name.lower())
        item = ExtractedField(
            value=name,
            importance=importance,
            evidence=[_evidence(quote_source, section.start + offset)],
        )
        (tools if kind == "tool" else skills).append(item)

    return skills, tools


def _find_term(text: str, term: str) -> Optional[re.Match]:
    if term in CASE_SENSITIVE_TERMS:
        return term_pattern(CASE_SENSITIVE_TERMS[term], True).search(text)
    return term_pattern(term).search(text)


def _pattern_candidates(content: str) -> list[tuple[int, str]]:
    """
    Free-form skill candidates from phrasing like "experience with X and Y".

    A candidate is kept when it is a known skill/tool, or when it looks like
    a proper name (capitalized, short, skill-shaped) that no dictionary
    entry already covers.
    """
    candidates = []

    for match in ExperiencePatterns.SKILL_LIST.finditer(content):
        list_start = match.start(1)
        for part in _split_list(match.group(1), list_start):
            candidates.append(part)

    for pattern in (ExperiencePatterns.STRONG_SKILL, ExperiencePatterns.PROGRAMMING):
        for match in pattern.finditer(content):
            candidates.append((match.start(1), match.group(1).strip()))

    accepted = []
    for offset, candidate in candidates:
        if _accept_candidate(candidate):
            accepted.append((offset, candidate))
    return accepted


def _split_list(phrase: str, base: int) -> list[tuple[int, str]]:
    parts = []
    position = 0
    for piece in ExperiencePatterns.LIST_SEPARATORS.split(phrase):
        index = phrase.find(piece, position)
        position = index + len(piece)
        item = piece.strip().rstrip(".")
        if item.lower().startswith("the "):
            item = item[4:]
        if item:
            parts.append((base + index + (len(piece) - len(piece.lstrip())), item))
    return parts


def _accept_candidate(candidate: str) -> bool:
    lowered = candidate.lower()
    if is_known_skill(lowered) or is_known_tool(lowered):
        return True
    if not candidate[:1].isupper():
        return False
    if len(candidate.split()) > MAX_PATTERN_SKILL_WORDS:
        return False
    if lowered in NON_SKILL_WORDS or not looks_like_skill(candidate):
        return False
    # Phrases wrapping a known term ("Python frameworks") are covered by the dictionary
    return not any(mentions_term(candidate, term) for term in KNOWN_SKILLS | KNOWN_TOOLS)


def _evidence(quote_source: str, index: int) -> EvidenceSpan:
    start, end = enclosing_line(quote_source, index)
    quote = quote_source[start:end].strip()[:MAX_EVIDENCE_QUOTE]
    return EvidenceSpan(quote=quote, start=start, end=end, confidence=EVIDENCE_CONFIDENCE)


# =============================================================================
# EXPERIENCE AND SENIORITY
# =============================================================================


def extract_years_experience(text: str) -> tuple[Optional[int], Optional[int]]:
    """
    Years-of-experience range mentioned in text.

    Ranges ("3-5 years") are read first; single figures inside a range
    span are skipped so "3-5 years" does not also count as "5 years".
    A single figure n implies a max of n + 2. Across mentions the result
    is the smallest minimum and the largest maximum.

    Returns:
        (min, max), or (None, None) when nothing plausible is mentioned
    """
    mins: list[int] = []
    maxes: list[int] = []
    range_spans = []

    for match in ExperiencePatterns.YEARS_RANGE.finditer(text):
        low, high = int(match.group(1)), int(match.group(2))
        if 0 <= low <= high <= MAX_YEARS:
            mins.append(low)
            maxes.append(high)
            range_spans.append(match.span())

    for pattern in ExperiencePatterns.YEARS_SINGLE:
        for match in pattern.finditer(text):
            if any(start <= match.start() < end for start, end in range_spans):
                continue
            years = int(match.group(1))
            if 0 <= years <= MAX_YEARS:
                mins.append(years)
                maxes.append(years + OPEN_RANGE_SPREAD)

    if not mins:
        return None, None
    return min(mins), max(maxes)


def detect_seniority(
    title: str,
    text: str,
    years_min: Optional[int],
    mappings: SeniorityMappings,
) -> Seniority:
    """
    Expected seniority for the role.

    Keywords decide first: the title, then the requirement text. Only when
    neither names a level does the years-of-experience minimum pick one,
    and with no years either the default is mid. A minimum of two years or
    fewer overrides a senior/lead keyword reading to entry, since years
    evidence is trusted over title inflation.
    """
    level = mappings.keyword_level(title) or mappings.keyword_level(text)
    if level is None:
        level = mappings.detect_from_years(years_min) if years_min is not None else "mid"

    if years_min is not None and years_min <= 2 and level in ("senior", "lead"):
        return "entry"
    return level


# =============================================================================
# EDUCATION, CERTIFICATIONS, DOMAIN
# =============================================================================


def extract_education(text: str) -> list[str]:
    education = []
    for pattern in EDUCATION_PATTERNS:
        for match in pattern.finditer(text):
            phrase = match.group(0).strip().rstrip(",")[:MAX_EDUCATION_LENGTH]
            if phrase and phrase not in education:
                education.append(phrase)
    return education


def extract_certifications(text: str) -> list[str]:
    return [
        cert
        for cert in CERTIFICATIONS
        if contains_term(text, cert, case_sensitive=cert.isupper())
    ]


def extract_domain_keywords(text: str) -> list[str]:
    found = []
    for keyword in DOMAIN_KEYWORDS:
        if keyword in UPPERCASE_DOMAIN_TERMS:
            present = contains_term(text, keyword.upper(), case_sensitive=True)
        else:
            present = contains_term(text, keyword)
        if present:
            found.append(keyword)
    return found


# =============================================================================
# RESPONSIBILITIES AND BENEFITS
# =============================================================================


def extract_responsibilities(text: str, config: JobDiscoveryConfig) -> list[str]:
    """Duty bullets from the responsibilities section (or whole text), at most 15."""
    section = find_section(text, config.requirements_extraction.responsibility_section_keywords)
    source = section.content if section else text
    duties = [bullet for bullet in extract_bullets(source) if is_responsibility(bullet)]
    return duties[:MAX_RESPONSIBILITIES]


def extract_benefits(text: str, config: JobDiscoveryConfig) -> list[str]:
    """Bullets from the benefits section, at most 10; empty when there is no section."""
    section = find_section(text, config.requirements_extraction.benefit_section_keywords)
    if section is None:
        return []
    return extract_bullets(section.content)[:MAX_BENEFITS]
