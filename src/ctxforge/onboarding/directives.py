"""Best-practice directive blocks keyed by language and framework.

Each directive set covers a group of languages and may append extra lines for
specific frameworks.  Selection walks the sets in order and falls back to the
generic set, so adding a language or framework is a data change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ctxforge.onboarding.detection import ProjectClassification


@dataclass(frozen=True)
class DirectiveSet:
    """Base directives for a group of languages plus per-framework extras."""

    name: str
    languages: frozenset[str]
    base: str
    framework_extras: dict[str, str] = field(default_factory=dict)

    def render(self, framework: str) -> str:
        """Return the base block, with the extras for *framework* appended."""
        extra = self.framework_extras.get(framework)
        if extra:
            return f"{self.base}\n{extra}"
        return self.base


# ---------------------------------------------------------------------------
# Built-in directive sets
# ---------------------------------------------------------------------------

WEB_DIRECTIVES = DirectiveSet(
    name="web",
    languages=frozenset({"TypeScript", "JavaScript"}),
    base=(
        "- Keep components small and focused on a single responsibility\n"
        "- Debounce user input that triggers network requests\n"
        "- Lazy-load routes and heavy modules\n"
        "- Handle loading, empty and error states in every data view\n"
        "- Never block the main thread with long synchronous work"
    ),
    framework_extras={
        "React": (
            "- Memoize expensive computations with useMemo and callbacks with useCallback\n"
            "- Give list items stable keys, never array indexes\n"
            "- Keep state as close as possible to where it is used"
        ),
    },
)

PYTHON_DIRECTIVES = DirectiveSet(
    name="python",
    languages=frozenset({"Python"}),
    base=(
        "- Follow PEP 8 and keep functions short\n"
        "- Use type hints on public functions\n"
        "- Prefer generators for large sequences\n"
        "- Use context managers for files, connections and locks\n"
        "- Raise specific exceptions and never silence them with a bare except"
    ),
    framework_extras={
        "Django": (
            "- Use select_related and prefetch_related to avoid N+1 queries\n"
            "- Keep business logic out of views\n"
            "- Put every schema change in a migration"
        ),
        "FastAPI": (
            "- Declare request and response models with Pydantic\n"
            "- Use async endpoints for I/O-bound work\n"
            "- Share resources through dependency injection"
        ),
    },
)

GENERIC_DIRECTIVES = DirectiveSet(
    name="generic",
    languages=frozenset(),
    base=(
        "- Choose data structures for the access pattern, not by habit\n"
        "- Validate input at system boundaries\n"
        "- Handle errors explicitly and report them with context\n"
        "- Write tests alongside every feature\n"
        "- Document public interfaces"
    ),
)

DIRECTIVE_SETS: tuple[DirectiveSet, ...] = (WEB_DIRECTIVES, PYTHON_DIRECTIVES)


def directive_set_for(language: str) -> DirectiveSet:
    """Return the directive set covering *language* (generic if none does)."""
    for directive_set in DIRECTIVE_SETS:
        if language in directive_set.languages:
            return directive_set
    return GENERIC_DIRECTIVES


def select_directives(classification: ProjectClassification) -> str:
    """Return the directive block for a classified project."""
    return directive_set_for(classification.language).render(classification.framework)
