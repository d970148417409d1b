"""Basic behavioural specification from a one-line feature description."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Technology keywords recognised in descriptions (lowercase).
_TECH_KEYWORDS = frozenset(
    {
        "python",
        "javascript",
        "typescript",
        "react",
        "vue",
        "angular",
        "svelte",
        "astro",
        "django",
        "flask",
        "fastapi",
        "express",
        "nextjs",
        "laravel",
        "php",
        "rails",
        "docker",
        "postgres",
        "mysql",
        "redis",
        "mongodb",
        "graphql",
        "rest",
        "jwt",
        "golang",
        "rust",
        "swift",
        "kotlin",
        "java",
        "node",
        "cloudflare",
        "aws",
        "n8n",
    }
)

# Leading phrases stripped when deriving a title, longest first.
_LEADING_PHRASES = (
    "users need to",
    "users want to",
    "we need to",
    "i want to",
    "i need to",
    "please",
)
_LEADING_VERBS = frozenset({"add", "create", "build", "implement", "make", "develop", "write"})
_ARTICLES = frozenset({"a", "an", "the"})
_TITLE_MAX_WORDS = 6

_SCALE_RE = re.compile(r"\d|\b(users?|products?|records?|items?|requests?|rows?)\b", re.I)
_LOCATION_RE = re.compile(r"\b(page|screen|section|dashboard|admin|sidebar|header|modal)\b", re.I)
_UX_RE = re.compile(r"\b(loading|error|empty|message|state|feedback|animation)s?\b", re.I)
_INTEGRATION_RE = re.compile(r"\b(existing|api|integrat\w*|following|pattern|connect\w*)\b", re.I)


@dataclass(frozen=True)
class ContextSignal:
    """One dimension of context quality and the question to ask when it is missing."""

    name: str
    present: bool
    question: str


def detect_tech_stack(text: str) -> list[str]:
    """Detect technology keywords in text using word boundary matching."""
    found: list[str] = []
    text_lower = text.lower()
    for kw in sorted(_TECH_KEYWORDS):
        if re.search(rf"\b{re.escape(kw)}\b", text_lower):
            found.append(kw)
    return found


def context_signals(description: str) -> list[ContextSignal]:
    """Evaluate *description* against the five context-quality dimensions."""
    return [
        ContextSignal(
            "Technology",
            bool(detect_tech_stack(description)),
            "Which stack or framework should this use?",
        ),
        ContextSignal(
            "Scale",
            bool(_SCALE_RE.search(description)),
            "How much data or how many users will this handle?",
        ),
        ContextSignal(
            "Location",
            bool(_LOCATION_RE.search(description)),
            "Where in the application does this live?",
        ),
        ContextSignal(
            "User experience",
            bool(_UX_RE.search(description)),
            "What should users see while loading, when empty, and on errors?",
        ),
        ContextSignal(
            "Integration",
            bool(_INTEGRATION_RE.search(description)),
            "Which existing code or APIs does this connect to?",
        ),
    ]


def feature_title(description: str) -> str:
    """Derive a short title-cased feature name from *description*."""
    text = description.strip().rstrip(".")
    lower = text.lower()
    for phrase in _LEADING_PHRASES:
        if lower.startswith(phrase + " "):
            text = text[len(phrase) + 1 :]
            break

    words = text.split()
    if words and words[0].lower() in _LEADING_VERBS:
        words = words[1:]
    if words and words[0].lower() in _ARTICLES:
        words = words[1:]
    if not words:
        return "New Feature"
    return " ".join(w[:1].upper() + w[1:] for w in words[:_TITLE_MAX_WORDS])


def generate_basic_spec(description: str) -> str:
    """Render a behavioural specification skeleton for *description*."""
    title = feature_title(description)
    signals = context_signals(description)
    stack = detect_tech_stack(description)
    score = sum(1 for s in signals if s.present)

    lines: list[str] = [
        f"# Behavioral Specification: {title}",
        "",
        "## Original Request",
        "",
        f"> {description.strip()}",
        "",
        "## Context Quality",
        "",
        f"Signals present: {score}/{len(signals)}",
        "",
    ]
    for signal in signals:
        mark = "x" if signal.present else " "
        lines.append(f"- [{mark}] {signal.name}")
    lines.append("")
    if stack:
        lines.append(f"Detected technology: {', '.join(stack)}")
        lines.append("")

    missing = [s for s in signals if not s.present]
    if missing:
        lines.extend(["## Discovery Questions", ""])
        for n, signal in enumerate(missing, 1):
            lines.append(f"{n}. {signal.question}")
        lines.append("")

    lines.extend(
        [
            "## User Scenarios",
            "",
            f"SCENARIO: Successful use of {title}",
            "GIVEN a user is on the relevant part of the application",
            f"WHEN they use {title.lower()}",
            "THEN they see the expected result without errors",
            "",
            f"SCENARIO: {title} with no data",
            "GIVEN there is nothing to show yet",
            f"WHEN the user opens {title.lower()}",
            "THEN a helpful empty state explains what to do next",
            "",
            f"SCENARIO: {title} fails",
            "GIVEN the underlying operation cannot complete",
            "WHEN the user attempts the action",
            "THEN a clear error message is shown and no data is lost",
            "",
            "## Success Criteria",
            "",
            f"- ✅ {title} works for the main scenario",
            "- ✅ Loading, empty and error states are handled",
            "- ✅ Performance directives are followed",
            "- ✅ Tests cover every scenario above",
            "",
            "## Approval",
            "",
            "Review this specification and answer the discovery questions before"
            " implementation starts.",
            "",
        ]
    )
    return "\n".join(lines)
