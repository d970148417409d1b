"""Template placeholder substitution and bundled framework documents."""

from __future__ import annotations

import re
from importlib import resources
from typing import TYPE_CHECKING

from ctxforge.onboarding.directives import select_directives

if TYPE_CHECKING:
    from datetime import date

    from ctxforge.onboarding.detection import ProjectClassification

PROJECT_NAME = "[Project Name]"
DATE = "[Date]"
TECH_STACK = "[Technology stack]"
LLM = "[Which LLM - Claude/Gemini/etc.]"
DIRECTIVES = "[FRAMEWORK-SPECIFIC DIRECTIVES]"

PLACEHOLDERS: tuple[str, ...] = (PROJECT_NAME, DATE, TECH_STACK, LLM, DIRECTIVES)
_PLACEHOLDER_RE = re.compile("|".join(re.escape(p) for p in PLACEHOLDERS))

UNIVERSAL_LLM = "Multiple (Universal)"

# Framework documents installed into docs/context/ by ``ctxforge init``.
FRAMEWORK_FILES: tuple[str, ...] = (
    "FRAMEWORK.md",
    "LLM-INSTRUCTIONS.md",
    "PERFORMANCE-DIRECTIVES.md",
    "DISCOVERY-QUESTIONS.md",
    "TEMPLATES.md",
)

CONTEXT_TEMPLATE = "CONTEXT.template.md"


def placeholder_values(
    classification: ProjectClassification,
    project_name: str,
    today: date,
) -> dict[str, str]:
    """Return the replacement text for every known placeholder."""
    return {
        PROJECT_NAME: project_name,
        DATE: today.isoformat(),
        TECH_STACK: f"{classification.framework} ({classification.language})",
        LLM: UNIVERSAL_LLM,
        DIRECTIVES: select_directives(classification),
    }


def customize_template(
    template: str,
    classification: ProjectClassification,
    project_name: str,
    today: date,
) -> str:
    """Fill placeholders in *template* in a single pass.

    Only the first occurrence of each placeholder is replaced; placeholders
    absent from the template are skipped.  Substituted values are never
    rescanned, so a project name containing ``[Date]`` stays intact.
    """
    values = placeholder_values(classification, project_name, today)
    seen: set[str] = set()

    def _substitute(match: re.Match[str]) -> str:
        placeholder = match.group(0)
        if placeholder in seen:
            return placeholder
        seen.add(placeholder)
        return values[placeholder]

    return _PLACEHOLDER_RE.sub(_substitute, template)


def read_framework_file(name: str) -> str | None:
    """Return the text of a bundled framework document, or ``None`` if absent."""
    resource = resources.files("ctxforge") / "framework" / name
    if not resource.is_file():
        return None
    return resource.read_text(encoding="utf-8")
