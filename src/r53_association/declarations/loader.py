"""Loader for association declaration files."""

from __future__ import annotations

from pathlib import Path

import yaml

from r53_association.declarations.models import DeclarationFile


def load_declarations(path: str) -> DeclarationFile:
    declarations_path = Path(path)
    if not declarations_path.exists():
        raise FileNotFoundError(f"Declaration file not found: {declarations_path}")
    with declarations_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    return DeclarationFile.from_yaml(data)
