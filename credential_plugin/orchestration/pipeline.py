"""
Mutation pipeline for credential_plugin.

Runs the three project mutations in a fixed order:

1. patch the dependency block of app/build.gradle
2. (re)generate the Kotlin module and package sources
3. register the package in MainApplication.kt

Dependencies must exist before the generated sources compile, and the sources
must exist before the registration refers to them. A failed dependency patch
stops the run, and so does an unreadable build.gradle. A missing, unreadable or
unrecognised MainApplication.kt only produces a warning.
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ..core.exceptions import StorageError
from ..core.logging import bind_context, clear_context, get_logger
from ..core.types import MutationResult, PipelineState, StepOutcome, StepStatus
from ..models.project import ProjectTargets
from ..services.paths import resolve_targets, validate_package_identifier
from ..services.patcher import (
    DEPENDENCY_ANCHOR,
    apply_dependency_patch,
    apply_registration_patch,
    build_patch_targets,
)
from ..services.templates import PACKAGE_CLASS_NAME, generate_sources
from ..storage import LocalProjectStorage, ProjectStorage

logger = get_logger(__name__)

StorageFactory = Callable[[Path], ProjectStorage]

STEP_DEPENDENCIES = "dependencies"
STEP_GENERATE_FILES = "generate_files"
STEP_REGISTRATION = "registration"


@dataclass
class MutationContext:
    """State threaded through every step of a single run."""

    run_id: str
    package_name: str
    targets: ProjectTargets
    storage: ProjectStorage


Step = Callable[[MutationContext], Awaitable[StepOutcome]]


class MutationPipeline:
    """Applies the Google Credential Manager integration to a native project."""

    def __init__(self, storage_factory: StorageFactory = LocalProjectStorage) -> None:
        """Initialize the pipeline.

        Args:
            storage_factory: Builds the storage for a project root
        """
        self.storage_factory = storage_factory

    def _steps(self) -> list[tuple[str, Step, PipelineState]]:
        return [
            (STEP_DEPENDENCIES, self._patch_dependencies, PipelineState.DEPENDENCIES_PATCHED),
            (STEP_GENERATE_FILES, self._generate_files, PipelineState.FILES_GENERATED),
            (STEP_REGISTRATION, self._patch_registration, PipelineState.REGISTRATION_PATCHED),
        ]

    async def run(self, root: Path, package_name: str) -> MutationResult:
        """Run every step once, in order.

        Args:
            root: Native Android project root
            package_name: Android package for the generated sources

        Returns:
            MutationResult with one outcome per executed step. ``state`` is
            DONE on success and the last reached state otherwise.

        Raises:
            ValidationError: If the package name is blank.
        """
        package_name = validate_package_identifier(package_name)
        run_id = str(uuid.uuid4())[:8]
        context = MutationContext(
            run_id=run_id,
            package_name=package_name,
            targets=resolve_targets(root, package_name),
            storage=self.storage_factory(root),
        )
        result = MutationResult(run_id=run_id, android_package=package_name)

        bind_context(run_id=run_id)
        try:
            logger.info("Starting prebuild mutation", root=str(root), package=package_name)

            for name, step, reached in self._steps():
                started_at = datetime.now(timezone.utc)
                try:
                    outcome = await step(context)
                except (OSError, StorageError) as e:
                    outcome = StepOutcome(step=name, status=StepStatus.FAILED, message=str(e))
                outcome.started_at = started_at
                result.record(outcome)

                if outcome.status.is_fatal:
                    logger.error("Step failed, aborting", step=name, error=outcome.message)
                    break
                result.state = reached
            else:
                result.state = PipelineState.DONE

            result.mark_completed()
            logger.info(
                "Prebuild mutation finished",
                state=result.state.value,
                changed=result.changed,
                statuses={s.step: s.status.value for s in result.steps},
            )
            return result
        finally:
            clear_context()

    async def _patch_dependencies(self, context: MutationContext) -> StepOutcome:
        """Add the Credential Manager dependencies to app/build.gradle."""
        descriptor, _ = build_patch_targets(context.targets)
        key = context.targets.relative(descriptor.path)

        if not await context.storage.exists(key):
            return StepOutcome(
                step=STEP_DEPENDENCIES,
                status=StepStatus.FAILED,
                target=key,
                message=f"build.gradle not found at {descriptor.path}",
            )

        patch = apply_dependency_patch(await context.storage.load_text(key))
        if patch.applied:
            await context.storage.store_text(key, patch.text)
            logger.info("Added dependencies to build.gradle", path=key)
        elif patch.is_fatal:
            logger.error("Dependency anchor missing", path=key, marker=descriptor.marker)
        else:
            logger.info("Dependencies already present", path=key)

        return StepOutcome(
            step=STEP_DEPENDENCIES,
            status=patch.status,
            target=key,
            message=patch.message,
            metadata={"structural_mismatch": patch.is_fatal, "anchor": DEPENDENCY_ANCHOR},
        )

    async def _generate_files(self, context: MutationContext) -> StepOutcome:
        """Write GoogleCredentialModule.kt and GoogleCredentialPackage.kt."""
        storage = context.storage
        dir_key = context.targets.relative(context.targets.module_dir)
        await storage.ensure_directory(dir_key)

        written: list[str] = []
        changed: list[str] = []
        for generated in generate_sources(context.package_name):
            key = f"{dir_key}/{generated.full_name}"
            previous = await storage.load_text(key) if await storage.exists(key) else None

            await storage.store_text(key, generated.content)
            written.append(key)
            if previous is None or storage.compute_hash(previous) != storage.compute_hash(generated.content):
                changed.append(key)
            logger.info(f"Created {generated.full_name}", path=key)

        return StepOutcome(
            step=STEP_GENERATE_FILES,
            status=StepStatus.APPLIED if changed else StepStatus.ALREADY_APPLIED,
            target=dir_key,
            message=f"Wrote {len(written)} files ({len(changed)} changed)",
            metadata={"files": written, "changed": changed},
        )

    async def _patch_registration(self, context: MutationContext) -> StepOutcome:
        """Register GoogleCredentialPackage in MainApplication.kt."""
        _, bootstrap = build_patch_targets(context.targets)
        key = context.targets.relative(bootstrap.path)

        if not await context.storage.exists(key):
            message = f"MainApplication.kt not found at expected path: {bootstrap.path}"
            logger.warning(message)
            return StepOutcome(
                step=STEP_REGISTRATION,
                status=StepStatus.SKIPPED,
                target=key,
                message=message,
            )

        try:
            text = await context.storage.load_text(key)
        except StorageError as e:
            message = f"MainApplication.kt could not be read, register {PACKAGE_CLASS_NAME} manually: {e}"
            logger.warning(message, path=key)
            return StepOutcome(
                step=STEP_REGISTRATION,
                status=StepStatus.SKIPPED,
                target=key,
                message=message,
            )

        patch = apply_registration_patch(text)
        if patch.applied:
            await context.storage.store_text(key, patch.text)
            logger.info("Registered package in MainApplication.kt", path=key)
        elif patch.status is StepStatus.SKIPPED:
            logger.warning(patch.message, path=key)
        else:
            logger.info("Package already registered", path=key, marker=bootstrap.marker)

        return StepOutcome(
            step=STEP_REGISTRATION,
            status=patch.status,
            target=key,
            message=patch.message,
        )
