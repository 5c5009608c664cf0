"""Decide which files take part in attribution.

``classify`` is the single place the exclusion policy lives. It never raises
and has no side effects, so the same path always gets the same answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, Optional

BINARY_EXTENSIONS = frozenset(
    {"bin", "data", "elf", "gz", "hex128", "hex8", "pdf", "png", "tar", "wcfg", "xlsx"}
)

GENERATED_EXTENSIONS = frozenset({"v", "xml", "edif", "edf", "rpt", "xci"})

# Block-design exports from the FPGA toolchain
GENERATED_SUFFIXES = (".bd.tcl",)


class ExclusionReason(Enum):
    """Why a file was left out of attribution."""

    GENERATED = "generated"
    MOSTLY_IMPORTED = "mostly imported"
    BINARY_EXTENSION = "binary extension"
    AUTOGENERATED = "autogenerated"
    MOSTLY_AUTOGENERATED = "mostly autogenerated"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ExclusionPolicy:
    """Prefixes, extension sets and suffixes consulted by ``classify``."""

    generated_prefixes: tuple[str, ...] = ("cache/",)
    imported_prefixes: tuple[str, ...] = ("xip/",)
    binary_extensions: frozenset[str] = BINARY_EXTENSIONS
    generated_extensions: frozenset[str] = GENERATED_EXTENSIONS
    generated_suffixes: tuple[str, ...] = GENERATED_SUFFIXES


DEFAULT_POLICY = ExclusionPolicy()


@dataclass(frozen=True)
class ExcludedFile:
    path: str
    reason: ExclusionReason


def classify(path: str, policy: ExclusionPolicy = DEFAULT_POLICY) -> Optional[ExclusionReason]:
    """Return the reason ``path`` is excluded, or None if it is eligible.

    Rules are checked in order and the first match wins:

    1. generated-output directory prefix
    2. mostly-imported directory prefix
    3. binary extension
    4. generated-source extension
    5. generated build artifact name suffix
    """
    if path.startswith(policy.generated_prefixes):
        return ExclusionReason.GENERATED
    if path.startswith(policy.imported_prefixes):
        return ExclusionReason.MOSTLY_IMPORTED

    name = PurePosixPath(path).name
    ext = _extension(name)
    if ext:
        if ext in policy.binary_extensions:
            return ExclusionReason.BINARY_EXTENSION
        if ext in policy.generated_extensions:
            return ExclusionReason.AUTOGENERATED

    if name.endswith(policy.generated_suffixes):
        return ExclusionReason.MOSTLY_AUTOGENERATED

    return None


def partition_files(
    paths: Iterable[str], policy: ExclusionPolicy = DEFAULT_POLICY
) -> tuple[list[str], list[ExcludedFile]]:
    """Split a file listing into eligible paths and excluded records."""
    eligible: list[str] = []
    excluded: list[ExcludedFile] = []
    for path in paths:
        reason = classify(path, policy)
        if reason is None:
            eligible.append(path)
        else:
            excluded.append(ExcludedFile(path=path, reason=reason))
    return eligible, excluded


def _extension(name: str) -> str:
    # Dotfiles like ".gitignore" have no extension
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext
