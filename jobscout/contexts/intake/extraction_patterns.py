"""
Reusable patterns and constants for job posting metadata extraction.

Pattern classes use the same layout as section_patterns.py:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Convenience lists ordered most specific first, for iteration

Keyword parts of a pattern are case-insensitive via scoped (?i:...) groups
while captured names stay case-sensitive, so "About the Role" is not read
as a company called "the Role".
"""

import re
from dataclasses import dataclass

# =============================================================================
# TITLE PATTERNS
# =============================================================================

# A title candidate must contain at least one of these to be accepted
TITLE_KEYWORDS = (
    "engineer",
    "developer",
    "designer",
    "manager",
    "analyst",
    "specialist",
    "lead",
    "director",
    "architect",
    "scientist",
    "consultant",
    "coordinator",
    "administrator",
    "executive",
    "officer",
    "associate",
    "intern",
    "head",
    "vp",
    "president",
    "chief",
    "senior",
    "junior",
    "staff",
    "principal",
    "technician",
    "operator",
    "assistant",
    "advisor",
    "strategist",
    "planner",
)

_ROLE_NOUNS = (
    "engineer|developer|designer|manager|analyst|specialist|lead|director|"
    "architect|scientist|consultant|coordinator"
)


@dataclass(frozen=True)
class TitlePatterns:
    """
    Regex patterns for extracting the job title.

    Only the first match of each pattern is considered; a candidate that
    fails validation moves on to the next pattern.
    """

    # Job Title: Senior Engineer / Position: ... / Role: ...
    LABELED: re.Pattern = re.compile(
        r"\b(?i:job\s*title|position|role|title)[^\S\n]*[:：][^\S\n]*([^\n\r]+)"
    )

    # A capitalized first line is usually the title
    FIRST_LINE: re.Pattern = re.compile(r"^([A-Z][^\n\r]{5,80})$", re.MULTILINE)

    # "We are looking for a Data Engineer ..."
    LOOKING_FOR: re.Pattern = re.compile(
        rf"(?:looking\s+for|hiring|seeking)\s+(?:a|an)\s+([A-Za-z ]+(?:{_ROLE_NOUNS})[a-z ]*)",
        re.IGNORECASE,
    )

    # "Acme is hiring a Backend Developer ..."
    IS_HIRING: re.Pattern = re.compile(
        rf"(?:is\s+hiring|is\s+looking\s+for)\s+(?:a|an)\s+([A-Za-z ]+(?:{_ROLE_NOUNS})[a-z ]*)",
        re.IGNORECASE,
    )


TITLE_PATTERNS = [
    TitlePatterns.LABELED,
    TitlePatterns.FIRST_LINE,
    TitlePatterns.LOOKING_FOR,
    TitlePatterns.IS_HIRING,
]


# =============================================================================
# COMPANY PATTERNS
# =============================================================================

_COMPANY_NAME = r"[A-Z][A-Za-z0-9 &.,'-]+?"


@dataclass(frozen=True)
class CompanyPatterns:
    """Regex patterns for extracting the hiring company name."""

    # Company: Acme Inc.
    LABELED: re.Pattern = re.compile(
        r"\b(?i:company|employer|organization|firm)[^\S\n]*[:：][^\S\n]*([^\n\r]+)"
    )

    # "Acme | Remote (US)" header lines
    PIPE_HEADER: re.Pattern = re.compile(r"^([A-Z][A-Za-z0-9&.' -]{1,60}?)[^\S\n]*\|", re.MULTILINE)

    # About Acme:
    ABOUT: re.Pattern = re.compile(
        rf"\b(?i:about)\s+({_COMPANY_NAME})(?:[^\S\n]*\n|[:：]|\s+is\s)"
    )

    # Acme is hiring / is looking / is seeking
    IS_HIRING: re.Pattern = re.compile(
        rf"^({_COMPANY_NAME})\s+(?i:is\s+hiring|is\s+looking|is\s+seeking)", re.MULTILINE
    )

    # Join Acme as ... / Join Acme!
    JOIN: re.Pattern = re.compile(
        rf"\b(?i:join)\s+({_COMPANY_NAME})(?:\s+as|\s+team|\s+and|[^\S\n]*[!\n])"
    )

    # "work at Acme," (weakest signal)
    WORK_AT: re.Pattern = re.compile(
        rf"\b(?i:work|working|position)\s+(?i:at|with)\s+({_COMPANY_NAME})(?:\s*[,.\n])"
    )

    # Legal suffixes dropped from extracted names
    LEGAL_SUFFIX: re.Pattern = re.compile(
        r"[,\s]+(?:Inc\.?|LLC|Ltd\.?|Corp\.?|Corporation|Co\.)\s*$", re.IGNORECASE
    )


COMPANY_PATTERNS = [
    CompanyPatterns.LABELED,
    CompanyPatterns.PIPE_HEADER,
    CompanyPatterns.ABOUT,
    CompanyPatterns.IS_HIRING,
    CompanyPatterns.JOIN,
    CompanyPatterns.WORK_AT,
]


# =============================================================================
# LOCATION AND WORK ARRANGEMENT PATTERNS
# =============================================================================

# Fallback city lookup when no location pattern matches
KNOWN_CITIES = (
    "San Francisco",
    "New York",
    "Seattle",
    "Austin",
    "Boston",
    "Los Angeles",
    "Chicago",
    "Denver",
    "Atlanta",
    "Portland",
    "San Diego",
    "Dallas",
    "London",
    "Berlin",
    "Paris",
    "Amsterdam",
    "Dublin",
    "Singapore",
    "Bangalore",
    "Toronto",
    "Vancouver",
    "Sydney",
    "Tokyo",
    "Shanghai",
)


@dataclass(frozen=True)
class LocationPatterns:
    """
    Regex patterns for extracting location information.

    Uses literal spaces (not \\s) inside place names to prevent matching
    across line breaks.
    """

    FULLY_REMOTE: re.Pattern = re.compile(
        r"\b(?:fully\s+remote|100%\s+remote|remote\s+only)\b", re.IGNORECASE
    )

    # Location: Austin, TX / Based in: ... / Headquarters: ...
    LABELED: re.Pattern = re.compile(
        r"\b(?i:location|based\s+in|office|headquarters)[^\S\n]*[:：][^\S\n]*([^\n\r]+)"
    )

    # City, ST - e.g., "Baltimore, MD"
    CITY_STATE: re.Pattern = re.compile(r"\b([A-Z][a-z]+(?: [A-Z][a-z]+)?,[^\S\n]*[A-Z]{2})\b")

    # City, Country - e.g., "Berlin, Germany"
    CITY_COUNTRY: re.Pattern = re.compile(
        r"\b([A-Z][a-z]+(?: [A-Z][a-z]+)?,[^\S\n]*[A-Z][a-z]+(?: [A-Z][a-z]+)?)\b"
    )

    REMOTE: re.Pattern = re.compile(
        r"\b(remote|fully\s+remote|100%\s+remote|work\s+from\s+home|wfh)\b", re.IGNORECASE
    )

    HYBRID: re.Pattern = re.compile(
        r"\b(hybrid|flexible\s+location|part\s+remote)\b", re.IGNORECASE
    )

    ANY_REMOTE: re.Pattern = re.compile(r"\bremote\b", re.IGNORECASE)


LOCATION_PATTERNS = [
    LocationPatterns.LABELED,
    LocationPatterns.CITY_STATE,
    LocationPatterns.CITY_COUNTRY,
    LocationPatterns.REMOTE,
    LocationPatterns.HYBRID,
]


@dataclass(frozen=True)
class WorkArrangementPatterns:
    """
    Work arrangement indicators, checked in declaration order.

    Explicit remote phrasing is the strongest signal, then hybrid, then
    onsite. A bare "remote" only counts when it is not negated.
    """

    REMOTE: re.Pattern = re.compile(
        r"\b(?:fully\s+remote|100%\s+remote|remote\s+only|remote\s+position|"
        r"work\s+from\s+anywhere|work\s+from\s+home)\b",
        re.IGNORECASE,
    )
    HYBRID: re.Pattern = re.compile(
        r"\b(?:hybrid|flexible\s+work|part[\s-]?remote|2-3\s+days|3\s+days\s+in[\s-]?office|"
        r"some\s+remote)\b",
        re.IGNORECASE,
    )
    ONSITE: re.Pattern = re.compile(
        r"\b(?:on[\s-]?site|in[\s-]?office|in[\s-]?person|office[\s-]?based|must\s+be\s+located)\b",
        re.IGNORECASE,
    )
    BARE_REMOTE: re.Pattern = re.compile(r"\bremote\b", re.IGNORECASE)
    NEGATED_REMOTE: re.Pattern = re.compile(r"\b(?:no|not|non)[\s-]?remote\b", re.IGNORECASE)


# =============================================================================
# SALARY PATTERNS
# =============================================================================

_RANGE_SEP = r"\s*(?:[-–—]|to)\s*"
_ANNUAL = r"(?:\s*(?:per\s+)?(?:year|yr|annually|/yr|/year))"


@dataclass(frozen=True)
class SalaryPatterns:
    """
    Regex patterns for extracting an annual salary range.

    Group 1 is the lower (or only) figure, group 2 the upper figure when present.
    """

    # $130,000 - $160,000 (per year)
    DOLLAR_RANGE: re.Pattern = re.compile(
        rf"\$\s*([\d,]+){_RANGE_SEP}\$\s*([\d,]+)\s*[kK]?{_ANNUAL}?", re.IGNORECASE
    )

    # $120k - $150k
    DOLLAR_K_RANGE: re.Pattern = re.compile(rf"\$\s*(\d+)\s*[kK]{_RANGE_SEP}\$?\s*(\d+)\s*[kK]")

    # $150,000/year or $150k per year
    DOLLAR_ANNUAL: re.Pattern = re.compile(rf"\$\s*([\d,]+)\s*[kK]?{_ANNUAL}", re.IGNORECASE)

    # 120k - 150k
    K_RANGE: re.Pattern = re.compile(
        rf"\b(\d+)\s*[kK]{_RANGE_SEP}(\d+)\s*[kK]{_ANNUAL}?", re.IGNORECASE
    )

    # Salary: $X - $Y
    LABELED_RANGE: re.Pattern = re.compile(
        rf"(?:salary|compensation|pay)\s*[:：]?\s*\$\s*([\d,]+){_RANGE_SEP}\$\s*([\d,]+)",
        re.IGNORECASE,
    )

    # Suffix marking the figures just matched as an hourly rate
    HOURLY_SUFFIX: re.Pattern = re.compile(
        r"\s*(?:/\s*(?:hr|hour)\b|per\s+hour\b|an\s+hour\b|hourly\b)", re.IGNORECASE
    )


SALARY_PATTERNS = [
    SalaryPatterns.DOLLAR_RANGE,
    SalaryPatterns.DOLLAR_K_RANGE,
    SalaryPatterns.DOLLAR_ANNUAL,
    SalaryPatterns.K_RANGE,
    SalaryPatterns.LABELED_RANGE,
]

# Sane bounds for an annual salary figure
SALARY_MIN_ANNUAL = 20_000
SALARY_MAX_ANNUAL = 2_000_000


# =============================================================================
# DATE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class DatePatterns:
    """Regex patterns for posted dates and application deadlines."""

    POSTED_DAYS_AGO: re.Pattern = re.compile(r"\bposted[:\s]+(\d+)\s+days?\s+ago", re.IGNORECASE)
    POSTED_RELATIVE: re.Pattern = re.compile(
        r"\bposted[:\s]+(today|yesterday|just\s+now)\b", re.IGNORECASE
    )
    POSTED_ISO: re.Pattern = re.compile(
        r"\bposted[:\s]+(?:on\s+)?(\d{4}[-/]\d{2}[-/]\d{2})", re.IGNORECASE
    )
    POSTED_LONG: re.Pattern = re.compile(
        r"\bposted[:\s]+(?:on\s+)?([A-Za-z]+\s+\d{1,2},?\s+\d{4})", re.IGNORECASE
    )
    DEADLINE_ISO: re.Pattern = re.compile(
        r"\b(?:deadline|apply\s+by|closes?)\s*[:：]?\s*(\d{4}[-/]\d{2}[-/]\d{2})", re.IGNORECASE
    )
    DEADLINE_LONG: re.Pattern = re.compile(
        r"\b(?:deadline|apply\s+by|closes?)\s*[:：]?\s*([A-Za-z]+\s+\d{1,2},?\s+\d{4})",
        re.IGNORECASE,
    )


POSTED_DATE_PATTERNS = [DatePatterns.POSTED_ISO, DatePatterns.POSTED_LONG]
DEADLINE_PATTERNS = [DatePatterns.DEADLINE_ISO, DatePatterns.DEADLINE_LONG]

# strptime formats tried for written-out dates ("March 5, 2025", "Mar 5 2025")
LONG_DATE_FORMATS = ("%B %d, %Y", "%B %d %Y", "%b %d, %Y", "%b %d %Y")


# =============================================================================
# COMPANY TIERS
# =============================================================================

TOP_TIER_COMPANIES = (
    "google",
    "apple",
    "amazon",
    "meta",
    "microsoft",
    "netflix",
    "openai",
    "anthropic",
    "stripe",
    "databricks",
    "alphabet",
)

UNICORN_COMPANIES = (
    "uber",
    "airbnb",
    "spotify",
    "shopify",
    "atlassian",
    "salesforce",
    "oracle",
    "adobe",
    "nvidia",
    "linkedin",
    "twitter",
    "snap",
    "pinterest",
    "dropbox",
    "slack",
    "zoom",
    "coinbase",
    "palantir",
    "snowflake",
    "plaid",
    "figma",
    "notion",
    "discord",
    "doordash",
    "instacart",
)

ESTABLISHED_COMPANIES = (
    "ibm",
    "intel",
    "cisco",
    "hp",
    "dell",
    "vmware",
    "sap",
    "accenture",
    "deloitte",
    "mckinsey",
    "goldman",
    "jpmorgan",
    "morgan stanley",
    "bank of america",
    "wells fargo",
    "citi",
    "capital one",
)
