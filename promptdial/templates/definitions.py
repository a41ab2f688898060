"""Built-in document templates, in declaration order."""

from __future__ import annotations

from ..models import SectionSpec, TemplateDefinition

ACADEMIC_REPORT = TemplateDefinition(
    id="academic-report",
    name="Academic Report",
    description="Structured academic or research report",
    system_instruction=(
        "You are an academic writing assistant. Produce well-structured, evidence-based content "
        "with proper citations and rigorous analysis."
    ),
    sections=(
        SectionSpec(
            "Executive Summary",
            "Provide a concise overview of the topic, key findings, and conclusions.",
            0,
            True,
        ),
        SectionSpec(
            "Introduction",
            "Introduce the topic, state the research question or thesis, and outline the scope.",
            0,
            True,
        ),
        SectionSpec("Background", "Provide historical context and prior work relevant to the topic.", 1),
        SectionSpec(
            "Methodology",
            "Describe the approach, framework, or methodology used in the analysis.",
            2,
        ),
        SectionSpec("Analysis", "Present detailed analysis with supporting evidence and data.", 1, True),
        SectionSpec(
            "Discussion",
            "Interpret findings, discuss implications, compare with existing literature.",
            2,
        ),
        SectionSpec("Limitations", "Acknowledge limitations of the analysis and potential biases.", 3),
        SectionSpec("Future Work", "Suggest areas for further research and investigation.", 4),
        SectionSpec("Conclusion", "Summarize key findings and their significance.", 0, True),
        SectionSpec("References", "List all sources cited in the report.", 3),
    ),
)

PRD = TemplateDefinition(
    id="prd",
    name="Product Requirements Document",
    description="Comprehensive product requirements and feature specification",
    system_instruction=(
        "You are a product management assistant. Produce clear, actionable product requirements "
        "with well-defined user stories, success metrics, and technical considerations."
    ),
    sections=(
        SectionSpec(
            "Problem Statement",
            "Define the problem being solved, who it affects, and why it matters.",
            0,
            True,
        ),
        SectionSpec("User Personas", "Describe the target users, their needs, goals, and pain points.", 1),
        SectionSpec(
            "Requirements",
            "List functional and non-functional requirements with clear acceptance criteria.",
            0,
            True,
        ),
        SectionSpec(
            "User Stories",
            "Write user stories in the format: As a [persona], I want [goal] so that [benefit].",
            2,
        ),
        SectionSpec(
            "Technical Architecture",
            "Outline the technical approach, system components, and integration points.",
            3,
        ),
        SectionSpec("Success Metrics", "Define measurable KPIs and success criteria for the product.", 1),
        SectionSpec("Timeline", "Provide a phased timeline with milestones and deliverables.", 2),
        SectionSpec("Risks", "Identify risks, dependencies, and mitigation strategies.", 3),
        SectionSpec(
            "Appendix",
            "Include supplementary materials, references, and supporting documents.",
            4,
        ),
    ),
)

DECISION_MEMO = TemplateDefinition(
    id="decision-memo",
    name="Decision Memo",
    description="Structured decision analysis with options and recommendations",
    system_instruction=(
        "You are a strategic decision analyst. Present options objectively, analyze trade-offs "
        "rigorously, and provide clear, well-reasoned recommendations."
    ),
    sections=(
        SectionSpec(
            "Context",
            "Describe the situation, background, and why a decision is needed now.",
            0,
            True,
        ),
        SectionSpec("Options", "Present the available options or alternatives under consideration.", 0, True),
        SectionSpec("Analysis", "Compare options across relevant dimensions with supporting evidence.", 1),
        SectionSpec("Recommendation", "State the recommended option with clear rationale.", 0, True),
        SectionSpec(
            "Trade-offs",
            "Explicitly enumerate what is gained and lost with the recommendation.",
            2,
        ),
        SectionSpec("Implementation Plan", "Outline steps to execute the recommended option.", 3),
        SectionSpec(
            "Rollback Plan",
            "Describe how to reverse the decision if outcomes are unfavorable.",
            4,
        ),
    ),
)

CRITIQUE = TemplateDefinition(
    id="critique",
    name="Critique",
    description="Balanced critical analysis with strengths, weaknesses, and recommendations",
    system_instruction=(
        "You are a critical analysis assistant. Provide balanced, evidence-based evaluation with "
        "clear reasoning. Identify both strengths and weaknesses objectively."
    ),
    sections=(
        SectionSpec("Summary", "Provide a brief summary of the subject being critiqued.", 0, True),
        SectionSpec("Strengths", "Identify and explain the key strengths and positive aspects.", 0, True),
        SectionSpec(
            "Weaknesses",
            "Identify and explain the key weaknesses and areas for improvement.",
            0,
            True,
        ),
        SectionSpec(
            "Evidence Assessment",
            "Evaluate the quality and reliability of evidence presented.",
            2,
        ),
        SectionSpec("Methodology Review", "Assess the methodology, approach, or framework used.", 3),
        SectionSpec(
            "Alternative Perspectives",
            "Present alternative viewpoints and counterarguments.",
            3,
        ),
        SectionSpec("Recommendations", "Provide actionable recommendations for improvement.", 1),
    ),
)

RESEARCH_BRIEF = TemplateDefinition(
    id="research-brief",
    name="Research Brief",
    description="Concise research summary with key findings and recommendations",
    system_instruction=(
        "You are a research analyst. Synthesize information clearly, highlight key findings, and "
        "provide actionable recommendations backed by data."
    ),
    sections=(
        SectionSpec("Key Findings", "Present the most important findings and insights upfront.", 0, True),
        SectionSpec(
            "Background",
            "Provide context and background information on the research topic.",
            1,
        ),
        SectionSpec(
            "Data Sources",
            "Describe the data sources, their reliability, and any limitations.",
            2,
        ),
        SectionSpec("Analysis", "Present the detailed analysis supporting the key findings.", 1),
        SectionSpec("Implications", "Discuss the implications of the findings for stakeholders.", 2),
        SectionSpec(
            "Recommendations",
            "Provide clear, actionable recommendations based on the analysis.",
            0,
            True,
        ),
        SectionSpec("Appendix", "Include supplementary data, charts, and detailed methodology.", 4),
    ),
)

BUILTIN_TEMPLATES: tuple[TemplateDefinition, ...] = (
    ACADEMIC_REPORT,
    PRD,
    DECISION_MEMO,
    CRITIQUE,
    RESEARCH_BRIEF,
)


__all__ = [
    "ACADEMIC_REPORT",
    "BUILTIN_TEMPLATES",
    "CRITIQUE",
    "DECISION_MEMO",
    "PRD",
    "RESEARCH_BRIEF",
]
