"""Context-quality guide text for ``context-help`` and ``context-examples``."""

from __future__ import annotations

GUIDE_PATH = "docs/context/DISCOVERY-QUESTIONS.md"

# (label, explanation, example)
CONTEXT_DIMENSIONS: tuple[tuple[str, str, str], ...] = (
    ("Technology", "What stack/framework to use", '"using React with TypeScript"'),
    ("Scale", "How much data/how many users", '"for 500+ products"'),
    ("Location", "Where this goes in your app", '"on the dashboard page"'),
    ("UX", "What users should see", '"with loading states"'),
    ("Integration", "How it connects to existing code", '"using existing API"'),
)

# (poor, better, rich)
CONTEXT_EXAMPLES: tuple[tuple[str, str, str], ...] = (
    (
        "Add search",
        "Add search to products page using React",
        "Add real-time search to products page using React, filtering 500+ products "
        "by name and category, with loading states and empty results message",
    ),
    (
        "Create user authentication",
        "Create JWT authentication for React app",
        "Create JWT authentication for React TypeScript app with login/register forms, "
        "password validation, and remember me option",
    ),
)


def context_help() -> str:
    lines = [
        "Context Quality Quick Guide",
        "",
        "Better context = Better AI results",
        "",
        "Before asking AI for help, provide:",
        "",
    ]
    for label, explanation, example in CONTEXT_DIMENSIONS:
        lines.append(f"{label}: {explanation}")
        lines.append(f"   Example: {example}")
        lines.append("")
    lines.append(f"Learn more: {GUIDE_PATH}")
    lines.append("See examples: ctxforge context-examples")
    return "\n".join(lines)


def context_examples() -> str:
    lines = ["Context Examples: Poor vs Rich", ""]
    for poor, better, rich in CONTEXT_EXAMPLES:
        lines.append(f'POOR:   "{poor}"')
        lines.append(f'BETTER: "{better}"')
        lines.append(f'RICH:   "{rich}"')
        lines.append("")
    lines.extend(
        [
            "Pattern: start with the basic request, then add:",
            "   - Technology details",
            "   - Scale/volume information",
            "   - Specific features",
            "   - User experience requirements",
            "   - Integration context",
            "",
            f"Complete guide: {GUIDE_PATH}",
        ]
    )
    return "\n".join(lines)
