# =============================================================================
# core/vocabulary.py  —  Static lookup tables (synonyms, roles, topics)
# =============================================================================
#
# Pure data.  Every table is an immutable mapping of tuples, built once at
# import time and shared read-only by all requests.  Keys are lowercase.
#
#   ROLE_SYNONYMS      role  → words that signal the role in a session
#   TOPIC_SYNONYMS     topic → words that signal the topic in a session
#   ROLE_PHRASES       query phrase → canonical role   (ordered, first wins)
#   TOPIC_PHRASES      query phrase → canonical topic  (ordered, all match)
#   CONFERENCE_DAYS    display order of days in an agenda
# =============================================================================

from types import MappingProxyType

ROLE_SYNONYMS = MappingProxyType({
    "product manager": (
        "product", "pm", "product management", "business executive",
        "business", "strategy",
    ),
    "developer": (
        "dev", "engineer", "software engineer", "developer / engineer",
        "programmer", "coder", "development",
    ),
    "architect": (
        "solution architect", "technical architect",
        "solution / systems architect", "architecture",
    ),
    "data scientist": (
        "data", "analytics", "ml engineer", "ai engineer", "data science",
    ),
    "devops": (
        "sre", "platform engineer", "devops engineer", "infrastructure",
        "operations",
    ),
    "security": (
        "cybersecurity", "infosec", "security engineer", "compliance",
    ),
    "executive": (
        "cto", "ceo", "vp", "director", "leadership", "manager", "management",
    ),
    "it manager": (
        "it professional / technical manager", "technical manager",
    ),
})

TOPIC_SYNONYMS = MappingProxyType({
    "agents": (
        "agent", "ai agent", "intelligent agent", "autonomous",
        "bedrock agents", "chatbot", "bot", "assistant", "conversational",
        "lex", "alexa", "bedrock", "anthropic", "claude",
    ),
    "ai": (
        "artificial intelligence", "machine learning", "ml", "generative ai",
        "genai", "neural", "deep learning", "llm", "foundation model",
        "sagemaker", "comprehend", "textract",
    ),
    "leadership": (
        "management", "strategy", "executive", "team lead", "business",
        "transformation", "innovation", "culture",
    ),
    "security": (
        "cybersecurity", "infosec", "compliance", "governance", "identity",
        "access", "iam", "cognito",
    ),
    "data": (
        "analytics", "database", "data science", "big data", "warehouse",
        "lake", "redshift", "athena", "glue",
    ),
    "cloud": (
        "aws", "infrastructure", "migration", "serverless", "compute",
        "storage", "ec2", "s3", "lambda",
    ),
})

# Order matters: "product manager" must be tried before the bare "manager".
ROLE_PHRASES = (
    ("product manager", "product manager"),
    ("pm", "product manager"),
    ("data scientist", "data scientist"),
    ("devops", "devops"),
    ("developer", "developer"),
    ("engineer", "developer"),
    ("architect", "architect"),
    ("security", "security"),
    ("executive", "executive"),
    ("manager", "executive"),
)

TOPIC_PHRASES = (
    ("agent", "agents"),
    ("agents", "agents"),
    ("agentic", "agents"),
    ("ai", "ai"),
    ("artificial intelligence", "ai"),
    ("genai", "ai"),
    ("machine learning", "machine learning"),
    ("ml", "machine learning"),
    ("bedrock", "bedrock"),
    ("lambda", "lambda"),
    ("serverless", "serverless"),
    ("security", "security"),
    ("data", "data"),
    ("analytics", "data"),
    ("leadership", "leadership"),
    ("cloud", "cloud"),
)

DEFAULT_ROLE = "attendee"
DEFAULT_TOPICS = ("AI",)

CONFERENCE_DAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
