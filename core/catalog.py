# =============================================================================
# core/catalog.py  —  Bundled sample session catalog
# =============================================================================
#
# A small, hand-written slice of a re:Invent-style catalog used when no
# CATALOG_CSV export is configured.  It is deliberately varied:
#   - several sessions share a time slot on the same day (conflicts)
#   - a few have no scheduled slot yet ("TBD")
#   - roles and topics are spread across tags, titles and services
# so the scorer and agenda builder have interesting choices to make.
# =============================================================================

from core.models import Event
from core.repository import normalize_event

_SAMPLE_RECORDS = (
    {
        "id": "KEY001", "type": "Keynote", "level": "100 – Foundational",
        "title": "CEO Keynote: The Next Decade of Cloud",
        "description": "Strategy, innovation and customer stories from across AWS.",
        "speakers": "Matt Garman", "venue": "Venetian",
        "dayTime": "Tuesday 8:00 - 10:30",
        "tags": "Business Executive, Leadership", "services": "",
    },
    {
        "id": "AIM201", "type": "Breakout session", "level": "200 – Intermediate",
        "title": "Building generative AI applications with Amazon Bedrock",
        "description": "Learn how to choose foundation models and build LLM-powered apps.",
        "speakers": "Jane Doe", "venue": "MGM",
        "dayTime": "Monday 10:00 - 11:00",
        "tags": "Developer / Engineer, Generative AI", "services": "Amazon Bedrock",
    },
    {
        "id": "AIM301", "type": "Workshop", "level": "300 – Advanced",
        "title": "Hands-on: Build AI agents with Bedrock Agents",
        "description": "Create an autonomous agent that calls tools and APIs.",
        "speakers": "Ravi Kumar", "venue": "Mandalay Bay",
        "dayTime": "Monday 10:00 - 12:00",
        "tags": "Developer / Engineer, Agents", "services": "Amazon Bedrock, AWS Lambda",
    },
    {
        "id": "AIM202", "type": "Chalk talk", "level": "200 – Intermediate",
        "title": "Machine learning in production with SageMaker",
        "description": "MLOps practices for training, deploying and monitoring models.",
        "speakers": "Lee Park", "venue": "Wynn",
        "dayTime": "Monday 13:00 - 14:00",
        "tags": "Data Scientist, Machine Learning", "services": "Amazon SageMaker",
    },
    {
        "id": "BIZ201", "type": "Breakout session", "level": "200 – Intermediate",
        "title": "Product management for AI-powered products",
        "description": "How product managers define strategy and success metrics for GenAI.",
        "speakers": "Ana Lopez", "venue": "Caesars Forum",
        "dayTime": "Tuesday 11:30 - 12:30",
        "tags": "Business Executive, Product, Generative AI", "services": "",
    },
    {
        "id": "SVS301", "type": "Breakout session", "level": "300 – Advanced",
        "title": "Serverless patterns with AWS Lambda",
        "description": "Event-driven architecture patterns for developers.",
        "speakers": "Sam Wu", "venue": "MGM",
        "dayTime": "Tuesday 11:30 - 12:30",
        "tags": "Developer / Engineer, Serverless", "services": "AWS Lambda, Amazon EventBridge",
    },
    {
        "id": "SEC201", "type": "Breakout session", "level": "200 – Intermediate",
        "title": "Securing generative AI workloads",
        "description": "Governance, identity and compliance for LLM applications.",
        "speakers": "Priya Shah", "venue": "Venetian",
        "dayTime": "Wednesday 9:00 - 10:00",
        "tags": "Security, Compliance", "services": "AWS IAM, Amazon Bedrock",
    },
    {
        "id": "ARC401", "type": "Chalk talk", "level": "400 – Expert",
        "title": "Architecting multi-Region resilience",
        "description": "Deep dive on architecture trade-offs for global applications.",
        "speakers": "Tom Becker", "venue": "Wynn",
        "dayTime": "Wednesday 9:00 - 10:00",
        "tags": "Solution / Systems Architect, Resilience", "services": "Amazon Route 53",
    },
    {
        "id": "DAT201", "type": "Breakout session", "level": "200 – Intermediate",
        "title": "Modern data lakes and analytics",
        "description": "Build a data lake with analytics for every team.",
        "speakers": "Chen Li", "venue": "Mandalay Bay",
        "dayTime": "Wednesday 14:00 - 15:00",
        "tags": "Data Scientist, Analytics", "services": "Amazon Athena, AWS Glue",
    },
    {
        "id": "DOP301", "type": "Builders' session", "level": "300 – Advanced",
        "title": "Platform engineering with infrastructure as code",
        "description": "SRE and DevOps teams automate operations at scale.",
        "speakers": "Max Fischer", "venue": "Caesars Forum",
        "dayTime": "Thursday 10:00 - 11:00",
        "tags": "DevOps Engineer, Infrastructure", "services": "AWS CloudFormation",
    },
    {
        "id": "KEY002", "type": "Keynote", "level": "100 – Foundational",
        "title": "Innovation Keynote: Agents everywhere",
        "description": "A look at agentic AI and what comes next.",
        "speakers": "Swami Sivasubramanian", "venue": "Venetian",
        "dayTime": "Thursday 8:30 - 10:00",
        "tags": "Generative AI, Agents", "services": "Amazon Bedrock",
    },
    {
        "id": "LDR101", "type": "Breakout session", "level": "100 – Foundational",
        "title": "Leading cloud transformation",
        "description": "Culture, management and change for executives.",
        "speakers": "Dana White", "venue": "Wynn",
        "dayTime": "Thursday 13:00 - 14:00",
        "tags": "Business Executive, Leadership", "services": "",
    },
    {
        "id": "WKS201", "type": "Workshop", "level": "200 – Intermediate",
        "title": "Build a chatbot with Amazon Lex",
        "description": "Conversational interfaces for customer service.",
        "speakers": "Omar Haddad", "venue": "MGM",
        "dayTime": "",
        "tags": "Developer / Engineer", "services": "Amazon Lex",
    },
    {
        "id": "CMP201", "type": "Breakout session", "level": "200 – Intermediate",
        "title": "Choosing the right compute for your workload",
        "description": "EC2, containers or serverless: how to decide.",
        "speakers": "", "venue": "",
        "dayTime": "Friday 9:00 - 10:00",
        "tags": "", "services": "Amazon EC2, AWS Fargate",
    },
)


def sample_catalog() -> list[Event]:
    return [normalize_event(record) for record in _SAMPLE_RECORDS]
