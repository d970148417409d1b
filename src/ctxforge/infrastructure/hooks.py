"""Git pre-commit hook that gates commits on context health."""

from __future__ import annotations

import stat
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

HOOK_MARKER = "# ctxforge pre-commit hook"

_HOOK_TEMPLATE_WARN = """\
#!/bin/sh
{marker}
# Mode: warn - prints context health problems, never blocks the commit.

if command -v ctxforge >/dev/null 2>&1; then
    if ! ctxforge health --fail-under {min_score}; then
        echo ""
        echo "Warning: context health is below {min_score}. Consider 'ctxforge optimize'."
    fi
fi
exit 0
"""

_HOOK_TEMPLATE_BLOCK = """\
#!/bin/sh
{marker}
# Mode: block - rejects the commit when context health is too low.

if command -v ctxforge >/dev/null 2>&1; then
    if ! ctxforge health --fail-under {min_score}; then
        echo ""
        echo "Commit blocked: context health is below {min_score}. Run 'ctxforge optimize'."
        exit 1
    fi
fi
exit 0
"""


class HooksError(Exception):
    """Raised when the hook cannot be installed."""


def render_hook(mode: str, min_score: int) -> str:
    template = _HOOK_TEMPLATE_BLOCK if mode == "block" else _HOOK_TEMPLATE_WARN
    return template.format(marker=HOOK_MARKER, min_score=min_score)


def hook_path(project_root: Path) -> Path:
    return project_root / ".git" / "hooks" / "pre-commit"


def install_hook(project_root: Path, *, mode: str = "warn", min_score: int = 70) -> Path:
    """Write an executable pre-commit hook.

    Raises :class:`HooksError` when ``.git/hooks`` does not exist or a foreign
    hook is already installed.
    """
    path = hook_path(project_root)
    if not path.parent.is_dir():
        raise HooksError(".git/hooks not found. Is this a git repository?")
    if path.exists() and HOOK_MARKER not in path.read_text(encoding="utf-8", errors="replace"):
        raise HooksError(f"{path} exists and was not installed by ctxforge.")

    path.write_text(render_hook(mode, min_score), encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def remove_hook(project_root: Path) -> bool:
    """Remove the ctxforge hook.  Returns ``False`` if there was none to remove."""
    path = hook_path(project_root)
    if not path.exists():
        return False
    if HOOK_MARKER not in path.read_text(encoding="utf-8", errors="replace"):
        raise HooksError(f"{path} was not installed by ctxforge.")
    path.unlink()
    return True
