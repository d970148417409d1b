"""Integration with AI-assistant context files and IDE rules files.

The snippet is wrapped in marker comments so re-running ``ctxforge init``
refreshes it in place instead of appending a second copy.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# AI-assistant context files that receive the integration snippet.
LLM_FILES: tuple[str, ...] = ("CLAUDE.md", "AGENTS.md", "GEMINI.md", "CODEX.md")

SNIPPET_START = "<!-- ctxforge:start -->"
SNIPPET_END = "<!-- ctxforge:end -->"

INTEGRATION_SNIPPET = f"""\
{SNIPPET_START}
## ctxforge Context Framework

Before starting any work on this project:

1. Read `docs/context/FRAMEWORK.md` and follow its working protocol.
2. Read `CONTEXT.md` for the current feature, completed work and learnings.
3. Ask the questions in `docs/context/DISCOVERY-QUESTIONS.md` before implementing.
4. Follow `docs/context/PERFORMANCE-DIRECTIVES.md` while coding.
{SNIPPET_END}
"""

# A block may not contain another start marker, so a stray unterminated
# start marker never pairs with a later end marker.
_SNIPPET_RE = re.compile(
    re.escape(SNIPPET_START)
    + r"(?:(?!" + re.escape(SNIPPET_START) + r").)*?"
    + re.escape(SNIPPET_END)
    + r"\n?",
    re.DOTALL,
)


def render_with_snippet(text: str) -> str:
    """Return *text* with exactly one up-to-date integration snippet."""
    if _SNIPPET_RE.search(text):
        return _SNIPPET_RE.sub(lambda _m: INTEGRATION_SNIPPET, text, count=1)
    if not text.strip():
        return INTEGRATION_SNIPPET
    return text.rstrip("\n") + "\n\n" + INTEGRATION_SNIPPET


def inject_snippet(path: Path) -> bool:
    """Insert or refresh the snippet in *path*.

    Returns ``True`` when the file content changed.
    """
    text = path.read_text(encoding="utf-8")
    updated = render_with_snippet(text)
    if updated == text:
        return False
    path.write_text(updated, encoding="utf-8")
    return True


def integrate_llm_files(project_root: Path) -> list[str]:
    """Inject the snippet into every LLM context file present in *project_root*.

    Missing files are not created; unreadable files are skipped.
    Returns names of files that changed.
    """
    changed: list[str] = []
    for name in LLM_FILES:
        path = project_root / name
        if not path.is_file():
            continue
        try:
            if inject_snippet(path):
                changed.append(name)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", name, exc)
    return changed


# ---------------------------------------------------------------------------
# IDE rules adapters
# ---------------------------------------------------------------------------

RULES_ADAPTER_TEMPLATE = """\
# Generated by ctxforge - do not edit manually
# See docs/context/FRAMEWORK.md for the source of truth

Read docs/context/FRAMEWORK.md and CONTEXT.md before starting any work on this project.
They contain the working protocol, current feature and performance directives.
"""

_ADAPTER_MARKERS = ("ctxforge", "docs/context/framework.md")

# IDE name -> (rules file, marker path that signals the IDE is in use).
RULES_CONFIGS: dict[str, tuple[str, str]] = {
    "cursor": (".cursorrules", ".cursor"),
    "windsurf": (".windsurfrules", ".windsurfrules"),
    "cline": (".clinerules", ".clinerules"),
}


def _is_ctxforge_adapter(path: Path) -> bool | None:
    """Check whether *path* holds a ctxforge adapter.

    Returns ``None`` if the file cannot be read.
    """
    try:
        content = path.read_text(encoding="utf-8").lower()
    except (OSError, UnicodeDecodeError):
        return None
    return any(marker in content for marker in _ADAPTER_MARKERS)


def setup_ide_rules(project_root: Path, *, force: bool = False) -> list[str]:
    """Create adapter rules files for detected IDEs.

    - IDE marker absent -> skipped (unless *force*).
    - Rules file missing -> created.
    - Rules file is a ctxforge adapter -> refreshed.
    - Rules file has user content or is unreadable -> left alone.

    Returns the rules file names written.
    """
    written: list[str] = []
    for rules_name, marker in RULES_CONFIGS.values():
        if not force and not (project_root / marker).exists():
            continue

        rules_path = project_root / rules_name
        if rules_path.exists():
            if _is_ctxforge_adapter(rules_path) is not True:
                logger.info("Leaving %s untouched (user content)", rules_name)
                continue
        rules_path.write_text(RULES_ADAPTER_TEMPLATE, encoding="utf-8")
        written.append(rules_name)
    return written
