"""Project-type detection from manifest files.

Detection is a fixed-priority rule table: the first rule whose manifest is
present and readable produces the classification.  A manifest that cannot be
read or parsed counts as absent and detection falls through to the next rule.
"""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from pathlib import Path


class ProjectType(enum.Enum):
    """Top-level project classification."""

    WEB_APPLICATION = "Web Application"
    PYTHON_APPLICATION = "Python Application"
    RUST_APPLICATION = "Rust Application"
    GO_APPLICATION = "Go Application"
    GENERIC_PROJECT = "Generic Project"
    UNKNOWN = "Unknown"


NO_FRAMEWORK = "None detected"
UNKNOWN_LANGUAGE = "Multiple/Unknown"


@dataclass(frozen=True)
class ProjectClassification:
    """Detected project type, framework and language."""

    type: ProjectType
    framework: str
    language: str
    manifest: str | None = None  # manifest file the matching rule keyed on


GENERIC_PROJECT = ProjectClassification(
    type=ProjectType.GENERIC_PROJECT,
    framework=NO_FRAMEWORK,
    language=UNKNOWN_LANGUAGE,
)

UNKNOWN_PROJECT = ProjectClassification(
    type=ProjectType.UNKNOWN,
    framework=NO_FRAMEWORK,
    language=UNKNOWN_LANGUAGE,
)


# ---------------------------------------------------------------------------
# JavaScript / TypeScript
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FrameworkRule:
    """Maps any of a set of dependency keys to a framework label."""

    dependencies: tuple[str, ...]
    framework: str


# Web UI frameworks first, server frameworks after.
JS_FRAMEWORK_RULES: tuple[FrameworkRule, ...] = (
    FrameworkRule(("react",), "React"),
    FrameworkRule(("vue",), "Vue.js"),
    FrameworkRule(("angular", "@angular/core"), "Angular"),
    FrameworkRule(("express",), "Express.js"),
    FrameworkRule(("next",), "Next.js"),
    FrameworkRule(("nuxt",), "Nuxt.js"),
)
JS_FALLBACK_FRAMEWORK = "Node.js"

TYPESCRIPT_MARKERS: tuple[str, ...] = ("typescript", "@types/node")


def _read_package_deps(package_json: Path) -> dict[str, Any] | None:
    """Merge ``dependencies`` and ``devDependencies`` from *package_json*.

    Returns ``None`` when the file is missing, unreadable or not a JSON object.
    """
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict):
        return None

    deps: dict[str, Any] = {}
    for key in ("dependencies", "devDependencies"):
        section = data.get(key)
        if isinstance(section, dict):
            deps.update(section)
    return deps


def select_js_framework(deps: dict[str, Any]) -> str:
    """Return the first framework in rule order whose dependency is present."""
    for rule in JS_FRAMEWORK_RULES:
        if any(dep in deps for dep in rule.dependencies):
            return rule.framework
    return JS_FALLBACK_FRAMEWORK


def _classify_package_json(project_root: Path) -> ProjectClassification | None:
    deps = _read_package_deps(project_root / "package.json")
    if deps is None:
        return None

    language = (
        "TypeScript" if any(marker in deps for marker in TYPESCRIPT_MARKERS) else "JavaScript"
    )
    return ProjectClassification(
        type=ProjectType.WEB_APPLICATION,
        framework=select_js_framework(deps),
        language=language,
        manifest="package.json",
    )


# ---------------------------------------------------------------------------
# Python
# ---------------------------------------------------------------------------

PYTHON_MARKERS: tuple[str, ...] = ("pyproject.toml", "requirements.txt", "setup.py")
PYTHON_ENTRY_FILES: tuple[str, ...] = ("app.py", "main.py")

# (substrings, framework) checked in order against the entry file text.
PYTHON_ENTRY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("flask", "Flask"), "Flask"),
    (("fastapi", "FastAPI"), "FastAPI"),
)


def _detect_python_framework(project_root: Path) -> str:
    """Detect a Python web framework from ``manage.py`` or the entry file.

    Only the first existing entry file is inspected.
    """
    if (project_root / "manage.py").exists():
        return "Django"

    for entry_name in PYTHON_ENTRY_FILES:
        entry = project_root / entry_name
        if not entry.exists():
            continue
        try:
            text = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return NO_FRAMEWORK
        for needles, framework in PYTHON_ENTRY_RULES:
            if any(needle in text for needle in needles):
                return framework
        return NO_FRAMEWORK

    return NO_FRAMEWORK


def _classify_python(project_root: Path) -> ProjectClassification | None:
    manifest = next((m for m in PYTHON_MARKERS if (project_root / m).exists()), None)
    if manifest is None:
        return None
    return ProjectClassification(
        type=ProjectType.PYTHON_APPLICATION,
        framework=_detect_python_framework(project_root),
        language="Python",
        manifest=manifest,
    )


# ---------------------------------------------------------------------------
# Existence-only manifests
# ---------------------------------------------------------------------------


def _existence_rule(
    manifest: str,
    project_type: ProjectType,
    framework: str,
    language: str,
) -> Callable[[Path], ProjectClassification | None]:
    classification = ProjectClassification(
        type=project_type,
        framework=framework,
        language=language,
        manifest=manifest,
    )

    def _classify(project_root: Path) -> ProjectClassification | None:
        return classification if (project_root / manifest).exists() else None

    return _classify


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

DETECTION_RULES: tuple[Callable[[Path], ProjectClassification | None], ...] = (
    _classify_package_json,
    _classify_python,
    _existence_rule("Cargo.toml", ProjectType.RUST_APPLICATION, "Cargo", "Rust"),
    _existence_rule("go.mod", ProjectType.GO_APPLICATION, "Go Modules", "Go"),
)


def detect_project_type(project_root: Path) -> ProjectClassification:
    """Classify the project rooted at *project_root*.

    Rules run in priority order and the first match wins.  Falls back to
    :data:`GENERIC_PROJECT`, or :data:`UNKNOWN_PROJECT` when the root cannot
    be read as a directory.  Never raises.
    """
    try:
        if not project_root.is_dir():
            return UNKNOWN_PROJECT
    except OSError:
        return UNKNOWN_PROJECT

    for rule in DETECTION_RULES:
        try:
            result = rule(project_root)
        except OSError:
            continue
        if result is not None:
            return result
    return GENERIC_PROJECT


# ---------------------------------------------------------------------------
# Project name
# ---------------------------------------------------------------------------

_TOML_NAME_RE = re.compile(r'^\s*name\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)
_GO_MODULE_RE = re.compile(r"^module\s+(\S+)", re.MULTILINE)


def _safe_read(path: Path) -> str:
    """Read file text, returning empty string on errors."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""


def detect_project_name(project_root: Path) -> str:
    """Detect project name from manifest files or directory name.

    Checks (in order): pyproject.toml, package.json, go.mod, Cargo.toml.
    Falls back to the directory name.
    """
    match = _TOML_NAME_RE.search(_safe_read(project_root / "pyproject.toml"))
    if match:
        return match.group(1)

    pkg_text = _safe_read(project_root / "package.json")
    if pkg_text:
        try:
            data = json.loads(pkg_text)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict) and data.get("name"):
            # Scoped packages: @org/name -> name.
            return str(data["name"]).split("/")[-1]

    match = _GO_MODULE_RE.search(_safe_read(project_root / "go.mod"))
    if match:
        return match.group(1).split("/")[-1]

    match = _TOML_NAME_RE.search(_safe_read(project_root / "Cargo.toml"))
    if match:
        return match.group(1)

    return project_root.resolve().name
