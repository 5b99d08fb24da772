"""
Idempotent Patching Service.

Text-level patches for the two host files the prebuild edits in place:

- ``app/build.gradle`` receives the Credential Manager dependencies right
  after the react-android declaration.
- ``MainApplication.kt`` registers GoogleCredentialPackage in its package list.

Each patch first looks for a marker; if the marker is present the text is
returned untouched, so applying a patch twice equals applying it once.
Matching is regex/substring based, which is enough for the narrow shapes of
the files Expo prebuild generates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ...core.types import StepStatus
from ...models.project import GradleDependency, PatchTarget, ProjectTargets
from ..templates import PACKAGE_CLASS_NAME

CREDENTIALS_VERSION = "1.3.0"
GOOGLEID_VERSION = "1.1.1"

CREDENTIAL_DEPENDENCIES: tuple[GradleDependency, ...] = (
    GradleDependency(group="androidx.credentials", artifact="credentials", version=CREDENTIALS_VERSION),
    GradleDependency(
        group="androidx.credentials",
        artifact="credentials-play-services-auth",
        version=CREDENTIALS_VERSION,
    ),
    GradleDependency(
        group="com.google.android.libraries.identity.googleid",
        artifact="googleid",
        version=GOOGLEID_VERSION,
    ),
)

DEPENDENCY_MARKER = CREDENTIAL_DEPENDENCIES[0].coordinate
DEPENDENCY_ANCHOR = 'implementation("com.facebook.react:react-android")'
DEPENDENCY_INDENT = "    "

REGISTRATION_MARKER = PACKAGE_CLASS_NAME
REGISTRATION_COMMENT = "// Google Sign-In via Credential Manager (expo-plugin-google-signin)"
REGISTRATION_STATEMENT = f"add({PACKAGE_CLASS_NAME}())"

# Expo SDK 50+: getPackages() = PackageList(this).packages.apply { ... }
APPLY_BLOCK_PATTERN = re.compile(
    r"(?P<head>PackageList\(this\)\.packages\.apply\s*\{)(?P<body>[^}]*)\}"
)
# Older templates: val packages = PackageList(this).packages ... return packages
ASSIGNMENT_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)val packages = PackageList\(this\)\.packages[ \t]*(?=\r?$)",
    re.MULTILINE,
)


@dataclass
class PatchResult:
    """Outcome of a text patch."""

    text: str
    applied: bool
    status: StepStatus
    message: str = ""

    @property
    def is_fatal(self) -> bool:
        return self.status.is_fatal


def line_separator(text: str) -> str:
    """The line ending used by ``text``; CRLF files stay CRLF."""
    return "\r\n" if "\r\n" in text else "\n"


def dependency_block(newline: str = "\n") -> str:
    """The lines inserted after the anchor, each on its own indented line."""
    return "".join(f"{newline}{DEPENDENCY_INDENT}{dep.declaration}" for dep in CREDENTIAL_DEPENDENCIES)


def apply_dependency_patch(descriptor_text: str) -> PatchResult:
    """Insert the Credential Manager dependencies into build.gradle text.

    Args:
        descriptor_text: Current content of app/build.gradle.

    Returns:
        PatchResult. ``FAILED`` when the react-android anchor is missing; the
        text is then returned unchanged.
    """
    if DEPENDENCY_MARKER in descriptor_text:
        return PatchResult(
            text=descriptor_text,
            applied=False,
            status=StepStatus.ALREADY_APPLIED,
            message="Dependencies already present",
        )

    if DEPENDENCY_ANCHOR not in descriptor_text:
        return PatchResult(
            text=descriptor_text,
            applied=False,
            status=StepStatus.FAILED,
            message=f"Anchor {DEPENDENCY_ANCHOR} not found; build.gradle has an unexpected shape",
        )

    block = dependency_block(line_separator(descriptor_text))
    patched = descriptor_text.replace(DEPENDENCY_ANCHOR, DEPENDENCY_ANCHOR + block, 1)
    return PatchResult(
        text=patched,
        applied=True,
        status=StepStatus.APPLIED,
        message=f"Added {len(CREDENTIAL_DEPENDENCIES)} dependencies",
    )


def _leading_indent(block: str) -> str:
    for line in block.splitlines():
        if line.strip():
            return line[: len(line) - len(line.lstrip())]
    return ""


def _extend_apply_block(match: re.Match[str], newline: str) -> str:
    body = match.group("body")
    content = body.rstrip()
    trailing = body[len(content):]
    closing_indent = trailing.rsplit("\n", 1)[-1] if "\n" in trailing else ""
    indent = _leading_indent(content) or closing_indent + "  "
    return (
        f"{match.group('head')}{content}{newline}"
        f"{indent}{REGISTRATION_COMMENT}{newline}"
        f"{indent}{REGISTRATION_STATEMENT}{newline}"
        f"{closing_indent}}}"
    )


def _extend_assignment(match: re.Match[str], newline: str) -> str:
    indent = match.group("indent")
    return f"{match.group(0)}{newline}{indent}packages.{REGISTRATION_STATEMENT}"


def apply_registration_patch(bootstrap_text: str) -> PatchResult:
    """Register GoogleCredentialPackage in MainApplication.kt text.

    Existing entries of the package list are kept. When no known layout is
    found the text is returned unchanged with a ``SKIPPED`` status; the
    package then has to be registered by hand.
    """
    if REGISTRATION_MARKER in bootstrap_text:
        return PatchResult(
            text=bootstrap_text,
            applied=False,
            status=StepStatus.ALREADY_APPLIED,
            message="Package already registered",
        )

    newline = line_separator(bootstrap_text)
    for pattern, extend in (
        (APPLY_BLOCK_PATTERN, _extend_apply_block),
        (ASSIGNMENT_PATTERN, _extend_assignment),
    ):
        patched, count = pattern.subn(lambda m: extend(m, newline), bootstrap_text, count=1)
        if count:
            return PatchResult(
                text=patched,
                applied=True,
                status=StepStatus.APPLIED,
                message="Registered package in MainApplication.kt",
            )

    return PatchResult(
        text=bootstrap_text,
        applied=False,
        status=StepStatus.SKIPPED,
        message=(
            f"No PackageList(this).packages block found; add {REGISTRATION_STATEMENT} "
            "to getPackages() manually"
        ),
    )


def build_patch_targets(targets: ProjectTargets) -> tuple[PatchTarget, PatchTarget]:
    """Patch targets for the descriptor and the bootstrap file, in pipeline order."""
    return (
        PatchTarget(
            path=targets.descriptor_path,
            marker=DEPENDENCY_MARKER,
            description="Credential Manager dependencies",
        ),
        PatchTarget(
            path=targets.bootstrap_path,
            marker=REGISTRATION_MARKER,
            description="GoogleCredentialPackage registration",
        ),
    )
