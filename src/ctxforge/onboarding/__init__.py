"""Onboarding domain — project detection, directives, templates, and init."""

from ctxforge.onboarding.detection import (
    GENERIC_PROJECT,
    UNKNOWN_PROJECT,
    ProjectClassification,
    ProjectType,
    detect_project_name,
    detect_project_type,
)
from ctxforge.onboarding.directives import DIRECTIVE_SETS, DirectiveSet, select_directives
from ctxforge.onboarding.installer import InitResult, init_project
from ctxforge.onboarding.integration import integrate_llm_files, setup_ide_rules
from ctxforge.onboarding.specgen import generate_basic_spec
from ctxforge.onboarding.templates import customize_template

__all__ = [
    "DIRECTIVE_SETS",
    "GENERIC_PROJECT",
    "UNKNOWN_PROJECT",
    "DirectiveSet",
    "InitResult",
    "ProjectClassification",
    "ProjectType",
    "customize_template",
    "detect_project_name",
    "detect_project_type",
    "generate_basic_spec",
    "init_project",
    "integrate_llm_files",
    "select_directives",
    "setup_ide_rules",
]
