"""Built-in seed artifacts for an empty store."""

from __future__ import annotations

import copy
from typing import List, Sequence, Tuple

from ..models import Artifact, ArtifactBlock
from ..tokens import estimate_tokens

_SEED_TIMESTAMP = "2025-01-01T00:00:00.000Z"

# (id suffix, label, content, tags, priority, do_not_send)
_BlockRow = Tuple[str, str, str, Sequence[str], int, bool]


def _blocks(artifact_key: str, rows: Sequence[_BlockRow]) -> List[ArtifactBlock]:
    return [
        ArtifactBlock(
            id=f"seed-{artifact_key}-{suffix}",
            label=label,
            content=content,
            tags=list(tags),
            priority=priority,
            do_not_send=do_not_send,
            token_count=estimate_tokens(content),
        )
        for suffix, label, content, tags, priority, do_not_send in rows
    ]


def _artifact(key: str, name: str, aliases: Sequence[str], description: str, rows: Sequence[_BlockRow]) -> Artifact:
    return Artifact(
        id=f"seed-{key}",
        name=name,
        aliases=list(aliases),
        description=description,
        blocks=_blocks(key, rows),
        version=1,
        created_at=_SEED_TIMESTAMP,
        updated_at=_SEED_TIMESTAMP,
        is_seed=True,
    )


_SEEDS: Tuple[Artifact, ...] = (
    _artifact(
        "ai",
        "Artificial Intelligence",
        ("ai", "artificial-intelligence", "artificialintelligence"),
        "Core framing for writing about artificial intelligence systems.",
        (
            (
                "definition",
                "Working Definition",
                "Artificial intelligence covers systems that perform tasks normally requiring human "
                "judgement, from classification and planning to language generation.",
                ("introduction", "background", "executive summary"),
                90,
                False,
            ),
            (
                "history",
                "Historical Milestones",
                "Symbolic AI dominated until the 1980s; statistical learning rose in the 2000s; deep "
                "learning and large language models defined the 2010s and 2020s.",
                ("background",),
                70,
                False,
            ),
            (
                "limits",
                "Known Limitations",
                "Current systems hallucinate, inherit bias from training data, and are difficult to "
                "audit or explain.",
                ("limitations", "analysis", "weaknesses"),
                60,
                False,
            ),
            (
                "vendor-notes",
                "Vendor Evaluation Notes",
                "Internal pricing notes from vendor negotiations. Not for external use.",
                ("analysis", "internal-only"),
                40,
                True,
            ),
        ),
    ),
    _artifact(
        "ml",
        "Machine Learning",
        ("ml", "machine-learning", "machinelearning"),
        "Vocabulary and evaluation practice for machine learning projects.",
        (
            (
                "overview",
                "Learning Paradigms",
                "Supervised learning fits labelled examples, unsupervised learning finds structure in "
                "unlabelled data, and reinforcement learning optimises behaviour from reward signals.",
                ("introduction", "background"),
                85,
                False,
            ),
            (
                "evaluation",
                "Evaluation Practice",
                "Hold out a test set the model never sees during tuning and report variance across "
                "several random seeds.",
                ("methodology", "methodology review"),
                75,
                False,
            ),
            (
                "pitfalls",
                "Common Pitfalls",
                "Data leakage, distribution shift and overfitting to benchmarks are the usual reasons "
                "offline gains vanish in production.",
                ("limitations", "risks", "weaknesses"),
                60,
                False,
            ),
        ),
    ),
    _artifact(
        "llms",
        "Large Language Models",
        ("llms", "llm", "large-language-models"),
        "Capabilities and constraints of large language models.",
        (
            (
                "capabilities",
                "Capabilities",
                "Large language models draft text, summarise documents, write code and follow "
                "multi-step instructions when prompts are specific.",
                ("executive summary", "key findings"),
                85,
                False,
            ),
            (
                "context",
                "Context Windows",
                "Models only see what fits in their context window, so long inputs need retrieval or "
                "summarisation before they are sent.",
                ("technical architecture", "analysis"),
                70,
                False,
            ),
            (
                "risks",
                "Output Risks",
                "Outputs can be fluent but wrong; critical claims need citations or a human review step.",
                ("risks", "limitations"),
                65,
                False,
            ),
        ),
    ),
    _artifact(
        "product-management",
        "Product Management",
        ("pm", "product-management", "productmanagement"),
        "Product framing conventions for requirements documents.",
        (
            (
                "problem",
                "Problem Framing",
                "State the user problem before the solution, quantify its cost, and name who feels it "
                "most.",
                ("problem statement", "context"),
                90,
                False,
            ),
            (
                "personas",
                "Persona Conventions",
                "Each persona lists a goal, a frustration, and the moment in their week when the product "
                "matters.",
                ("user personas",),
                70,
                False,
            ),
            (
                "metrics",
                "Metric Guidelines",
                "Prefer one north-star metric plus two guardrail metrics; every metric needs a baseline "
                "and a target date.",
                ("success metrics",),
                65,
                False,
            ),
        ),
    ),
    _artifact(
        "startups",
        "Startups",
        ("startups", "startup"),
        "Operating assumptions for early-stage companies.",
        (
            (
                "runway",
                "Runway Discipline",
                "Every plan is checked against months of runway; a decision that shortens runway needs "
                "a matching milestone.",
                ("context", "constraints"),
                80,
                False,
            ),
            (
                "validation",
                "Customer Validation",
                "Talk to ten target customers before building; record the problems they describe in "
                "their own words.",
                ("problem statement", "evidence assessment"),
                70,
                False,
            ),
            (
                "focus",
                "Focus Rules",
                "Pursue one segment and one channel until growth stalls, then revisit the options.",
                ("options", "recommendation"),
                60,
                False,
            ),
        ),
    ),
    _artifact(
        "security",
        "Security",
        ("security", "infosec"),
        "Security requirements and threat considerations for product work.",
        (
            (
                "baseline",
                "Security Baseline",
                "All services must enforce TLS, rotate credentials at least quarterly, and log "
                "authentication events.",
                ("requirements", "technical architecture"),
                85,
                False,
            ),
            (
                "threats",
                "Threat Model Summary",
                "Primary threats are credential stuffing, dependency compromise, and data exfiltration "
                "through misconfigured storage.",
                ("risks", "analysis"),
                75,
                False,
            ),
            (
                "incident",
                "Incident Response",
                "Incidents are triaged within one hour and reviewed in a blameless postmortem within "
                "five working days.",
                ("implementation plan", "rollback plan"),
                50,
                False,
            ),
        ),
    ),
    _artifact(
        "data-science",
        "Data Science",
        ("ds", "data-science", "datascience"),
        "Analysis conventions for data science work.",
        (
            (
                "sources",
                "Data Provenance",
                "Name every source table, its owner and its refresh cadence before drawing conclusions "
                "from it.",
                ("data sources", "references"),
                80,
                False,
            ),
            (
                "stats",
                "Statistical Reporting",
                "Report effect sizes with confidence intervals; a p-value on its own is not a finding.",
                ("analysis", "key findings"),
                75,
                False,
            ),
            (
                "appendix",
                "Reproducibility",
                "Publish the query, the notebook and the environment so another analyst can rerun the "
                "numbers.",
                ("appendix", "methodology"),
                50,
                False,
            ),
        ),
    ),
    _artifact(
        "ux-design",
        "UX Design",
        ("ux", "ux-design", "uxdesign"),
        "Usability heuristics and research practice.",
        (
            (
                "heuristics",
                "Usability Heuristics",
                "Favour visible system status, user control, consistency, and error prevention over "
                "error messages.",
                ("strengths", "weaknesses", "evidence assessment"),
                80,
                False,
            ),
            (
                "research",
                "Research Methods",
                "Combine five-user moderated tests with analytics funnels; neither alone explains "
                "behaviour.",
                ("methodology", "methodology review", "data sources"),
                60,
                False,
            ),
            (
                "stories",
                "Story Writing",
                "User stories describe outcomes, not interface widgets, and reference a persona by name.",
                ("user stories",),
                55,
                False,
            ),
        ),
    ),
)


def seed_artifacts() -> List[Artifact]:
    """Return fresh copies of the built-in seed artifacts."""
    return [copy.deepcopy(artifact) for artifact in _SEEDS]


__all__ = ["seed_artifacts"]
