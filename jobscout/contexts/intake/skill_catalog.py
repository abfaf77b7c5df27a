"""
Known skill and tool vocabulary for requirement extraction.

Dictionary lookups give exact-match extraction; the pattern path in
requirements_extractor.py uses NON_SKILL_WORDS and looks_like_skill() to
vet free-form candidates. Display names map aliases onto one spelling so
"node", "nodejs" and "node.js" all come out as "Node.js".
"""

import re

from jobscout.utils.text_processing import contains_term

KNOWN_SKILLS = frozenset(
    {
        # Languages
        "javascript", "typescript", "python", "java", "c++", "c#", "ruby", "go",
        "golang", "rust", "swift", "kotlin", "scala", "php", "perl", "r", "matlab",
        "sql", "bash", "shell", "powershell", "html", "css", "sass", "less",
        # Frameworks and libraries
        "react", "angular", "vue", "svelte", "next.js", "nextjs", "nuxt", "gatsby",
        "node.js", "nodejs", "express", "fastify", "nestjs", "django", "flask",
        "fastapi", "spring", "rails", ".net", "asp.net", "laravel", "symfony",
        "tensorflow", "pytorch", "keras", "scikit-learn",
        # Disciplines and practices
        "machine learning", "deep learning", "data science", "data engineering",
        "software engineering", "backend", "frontend", "full stack", "fullstack",
        "devops", "mlops", "cloud", "microservices", "api", "rest", "graphql",
        "agile", "scrum", "kanban", "ci/cd", "tdd", "bdd", "oop",
        "functional programming", "system design", "distributed systems",
        "algorithms", "data structures", "security", "cybersecurity", "networking",
        "database", "data modeling", "product management", "project management",
        "technical writing", "communication", "leadership", "problem solving",
        "critical thinking",
    }
)  # fmt: skip

KNOWN_TOOLS = frozenset(
    {
        # Cloud
        "aws", "azure", "gcp", "google cloud", "heroku", "digitalocean", "vercel",
        "netlify",
        # Datastores
        "postgresql", "mysql", "mongodb", "redis", "elasticsearch", "dynamodb",
        "cassandra", "oracle", "sqlite", "neo4j", "couchdb", "firebase", "supabase",
        # Infrastructure and delivery
        "docker", "kubernetes", "terraform", "ansible", "jenkins", "circleci",
        "github actions", "gitlab ci", "travis ci", "prometheus", "grafana",
        "datadog", "splunk", "nginx",
        # Version control
        "git", "github", "gitlab", "bitbucket", "svn",
        # Editors
        "vscode", "intellij", "vim", "emacs", "sublime",
        # Testing
        "jest", "mocha", "jasmine", "pytest", "junit", "selenium", "cypress",
        "playwright",
        # Collaboration
        "jira", "asana", "trello", "monday", "notion", "confluence", "slack",
        # Design
        "figma", "sketch", "adobe xd", "photoshop", "illustrator",
        # Data
        "spark", "hadoop", "airflow", "kafka", "pandas", "numpy", "tableau",
        "power bi", "looker", "dbt", "snowflake", "bigquery", "redshift",
        # Platforms and API tooling
        "linux", "unix", "windows", "macos", "postman", "swagger", "openapi",
    }
)  # fmt: skip

# Terms that are ordinary English words in lowercase; matched only in their
# display spelling ("Go", "REST", "Spring")
CASE_SENSITIVE_TERMS = {
    "go": "Go",
    "rest": "REST",
    "express": "Express",
    "spring": "Spring",
    "swift": "Swift",
    "less": "LESS",
    "r": "R",
    "monday": "Monday",
    "sketch": "Sketch",
}

DISPLAY_NAMES = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "python": "Python",
    "java": "Java",
    "c++": "C++",
    "c#": "C#",
    "golang": "Go",
    "go": "Go",
    "react": "React",
    "angular": "Angular",
    "vue": "Vue.js",
    "nextjs": "Next.js",
    "next.js": "Next.js",
    "node": "Node.js",
    "nodejs": "Node.js",
    "node.js": "Node.js",
    "nestjs": "NestJS",
    "fastapi": "FastAPI",
    "pytorch": "PyTorch",
    "tensorflow": "TensorFlow",
    "scikit-learn": "scikit-learn",
    ".net": ".NET",
    "asp.net": "ASP.NET",
    "php": "PHP",
    "aws": "AWS",
    "gcp": "GCP",
    "azure": "Azure",
    "google cloud": "Google Cloud",
    "sql": "SQL",
    "nosql": "NoSQL",
    "mongodb": "MongoDB",
    "postgresql": "PostgreSQL",
    "mysql": "MySQL",
    "dynamodb": "DynamoDB",
    "redis": "Redis",
    "elasticsearch": "Elasticsearch",
    "bigquery": "BigQuery",
    "docker": "Docker",
    "kubernetes": "Kubernetes",
    "k8s": "Kubernetes",
    "terraform": "Terraform",
    "jenkins": "Jenkins",
    "circleci": "CircleCI",
    "github": "GitHub",
    "github actions": "GitHub Actions",
    "gitlab": "GitLab",
    "gitlab ci": "GitLab CI",
    "git": "Git",
    "jira": "Jira",
    "figma": "Figma",
    "kafka": "Kafka",
    "spark": "Apache Spark",
    "hadoop": "Hadoop",
    "linux": "Linux",
    "macos": "macOS",
    "jest": "Jest",
    "cypress": "Cypress",
    "vscode": "VS Code",
    "intellij": "IntelliJ",
    "power bi": "Power BI",
    "dbt": "dbt",
    "openapi": "OpenAPI",
    "ci/cd": "CI/CD",
    "rest": "REST",
    "graphql": "GraphQL",
    "html": "HTML",
    "css": "CSS",
    "sass": "Sass",
    "less": "LESS",
    "oop": "OOP",
    "tdd": "TDD",
    "bdd": "BDD",
    "api": "API",
    "machine learning": "Machine Learning",
    "ml": "Machine Learning",
    "deep learning": "Deep Learning",
    "ai": "AI",
    "mlops": "MLOps",
    "fullstack": "Full Stack",
    "full stack": "Full Stack",
    "backend": "Backend",
    "frontend": "Frontend",
    "devops": "DevOps",
    "agile": "Agile",
    "scrum": "Scrum",
}

# Words that are never skills on their own
NON_SKILL_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "with", "for", "to", "of", "in", "on",
        "is", "are", "be", "been", "being", "have", "has", "had", "do", "does",
        "did", "will", "would", "could", "should", "may", "might", "must", "shall",
        "you", "your", "we", "our", "they", "their", "this", "that", "these",
        "those", "ability", "experience", "knowledge", "understanding",
        "familiarity", "minimum", "preferred", "required", "strong", "excellent",
        "good",
    }
)  # fmt: skip

SKILL_SHAPE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+#.\s-]*[a-zA-Z0-9+#]$")

DOMAIN_KEYWORDS = (
    "fintech", "healthtech", "edtech", "e-commerce", "ecommerce", "saas", "b2b",
    "b2c", "enterprise", "startup", "ai", "ml", "blockchain", "crypto", "defi",
    "web3", "iot", "ar", "vr", "gaming", "social", "media", "advertising",
    "adtech", "martech", "proptech", "insurtech", "regtech", "legaltech",
    "hrtech", "logistics", "supply chain", "healthcare", "biotech", "pharma",
    "energy", "cleantech", "climate", "automotive", "manufacturing", "retail",
    "hospitality", "travel", "real estate", "construction",
    "telecommunications", "cybersecurity",
)  # fmt: skip

# Acronym domain terms; matched in uppercase only so "ai" in prose is ignored
UPPERCASE_DOMAIN_TERMS = frozenset({"ai", "ml", "ar", "vr"})

CERTIFICATIONS = (
    "AWS Certified",
    "Azure Certified",
    "GCP Certified",
    "PMP",
    "Scrum Master",
    "CSM",
    "PSM",
    "CISSP",
    "CISM",
    "CompTIA",
    "CKA",
    "CKAD",
    "CKS",
    "Terraform Certified",
)

EDUCATION_PATTERNS = (
    re.compile(r"\bbachelor'?s?\s+(?:degree|in)\b[^\n.;]*", re.IGNORECASE),
    re.compile(r"\bmaster'?s?\s+(?:degree|in)\b[^\n.;]*", re.IGNORECASE),
    re.compile(r"\b(?:phd|ph\.d\.?|doctorate)\b[^\n.;]*", re.IGNORECASE),
    re.compile(r"\b(?:bs/ms|ms/phd|bs/ba)\b[^\n.;]*", re.IGNORECASE),
)

# Longest education phrase kept before it is treated as a run-on sentence
MAX_EDUCATION_LENGTH = 120


def display_name(term: str) -> str:
    """
    Normalized display spelling for a skill or tool.

    Example:
        >>> display_name("nodejs")
        "Node.js"
        >>> display_name("data modeling")
        "Data Modeling"
    """
    lowered = term.strip().lower()
    if lowered in DISPLAY_NAMES:
        return DISPLAY_NAMES[lowered]
    return " ".join(word[:1].upper() + word[1:] for word in lowered.split())


def mentions_term(text: str, term: str) -> bool:
    """Whole-term lookup that honors CASE_SENSITIVE_TERMS."""
    if term in CASE_SENSITIVE_TERMS:
        return contains_term(text, CASE_SENSITIVE_TERMS[term], case_sensitive=True)
    return contains_term(text, term)


def is_known_skill(term: str) -> bool:
    return term.strip().lower() in KNOWN_SKILLS


def is_known_tool(term: str) -> bool:
    return term.strip().lower() in KNOWN_TOOLS


def looks_like_skill(candidate: str) -> bool:
    """
    Vet a free-form candidate from the pattern path.

    Rejects stop words, run-on phrases and anything with punctuation a skill
    name would never contain.
    """
    text = candidate.strip()
    if len(text) < 2 or len(text) > 40:
        return False
    if text.lower() in NON_SKILL_WORDS:
        return False
    return bool(SKILL_SHAPE.match(text))
