"""Jinja2 environments for the XML parts of a document package."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader

OVERRIDE_DIR = Path(".odtctl") / "templates"


def override_dirs(output_root: Path, group: str) -> list[Path]:
    """Directories searched for user templates, most specific first."""
    base = output_root / OVERRIDE_DIR
    return [base / group, base]


def build_template_environment(group: str, *, output_root: Path | None = None) -> Environment:
    """Return an autoescaping environment for template *group*.

    A part such as ``content.xml`` placed under ``<output_root>/.odtctl/templates/odt/``
    (or directly under ``.odtctl/templates/``) replaces the packaged one.
    """
    search: list[BaseLoader] = []
    if output_root is not None:
        dirs = [d for d in override_dirs(output_root, group) if d.is_dir()]
        if dirs:
            search.append(FileSystemLoader([str(d) for d in dirs]))
    search.append(PackageLoader("odtctl", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(search), autoescape=True, keep_trailing_newline=True)
