"""
Built-in expectations per generated content type.

Requirement descriptors drive the completeness check; structure fields drive
the format check. Keys match the ``content_type`` values emitted by the
generation pipeline.
"""

from artifact_eval.models import Requirement

ROADMAP = "roadmap"
SLIDES = "slides"
DOCUMENT = "document"
RESEARCH_ANALYSIS = "research-analysis"

DEFAULT_REQUIREMENTS: dict[str, tuple[Requirement, ...]] = {
    ROADMAP: (
        Requirement(name="title", path="title", type="string"),
        Requirement(name="timeColumns", path="timeColumns", type="array", min_length=2),
        Requirement(name="data", path="data", type="array", min_length=1),
        Requirement(name="legend", path="legend", type="array"),
        Requirement(name="researchAnalysis", path="researchAnalysis", type="object"),
    ),
    SLIDES: (
        Requirement(name="title", path="title", type="string"),
        Requirement(name="slides", path="slides", type="array", min_length=3),
        Requirement(name="slideContent", path="slides[].content", type="array"),
    ),
    DOCUMENT: (
        Requirement(name="title", path="title", type="string"),
        Requirement(name="sections", path="sections", type="array", min_length=2),
        Requirement(name="sectionContent", path="sections[].content", type="string"),
    ),
    RESEARCH_ANALYSIS: (
        Requirement(name="title", path="title", type="string"),
        Requirement(name="overallScore", path="overallScore", type="number"),
        Requirement(name="themes", path="themes", type="array"),
        Requirement(name="dataCompleteness", path="dataCompleteness", type="object"),
    ),
}

STRUCTURE_FIELDS: dict[str, tuple[str, ...]] = {
    ROADMAP: ("title", "timeColumns", "data"),
    SLIDES: ("title", "slides"),
    DOCUMENT: ("title", "sections"),
    RESEARCH_ANALYSIS: ("title", "overallScore", "themes"),
}


def get_default_requirements(content_type: str | None) -> tuple[Requirement, ...]:
    """Get built-in requirements for a content type (empty when unknown)."""
    if not content_type:
        return ()
    return DEFAULT_REQUIREMENTS.get(content_type, ())


def get_structure_fields(content_type: str | None) -> tuple[str, ...]:
    """Get top-level fields a content type must carry (empty when unknown)."""
    if not content_type:
        return ()
    return STRUCTURE_FIELDS.get(content_type, ())


def list_content_types() -> list[str]:
    """List content types with built-in expectations."""
    return list(DEFAULT_REQUIREMENTS.keys())
