"""Unit tests for the mutation pipeline."""

import pytest

from credential_plugin.core.exceptions import ValidationError
from credential_plugin.core.types import PipelineState, StepStatus
from credential_plugin.orchestration import (
    STEP_DEPENDENCIES,
    STEP_GENERATE_FILES,
    STEP_REGISTRATION,
    MutationPipeline,
)
from credential_plugin.services.patcher import DEPENDENCY_ANCHOR
from credential_plugin.storage import LocalProjectStorage

PACKAGE = "com.example.app"
MODULE_DIR = "app/src/main/java/com/example/app"


class FailingWriteStorage(LocalProjectStorage):
    """Local storage whose writes fail, to simulate a read-only tree."""

    async def store_text(self, key, content):
        raise PermissionError(f"read-only: {key}")


def _statuses(result):
    return [(step.step, step.status) for step in result.steps]


@pytest.mark.asyncio
class TestMutationPipeline:
    """Tests for MutationPipeline.run."""

    async def test_first_run_applies_everything(self, android_root):
        result = await MutationPipeline().run(android_root, PACKAGE)

        assert result.success
        assert result.state == PipelineState.DONE
        assert result.changed
        assert _statuses(result) == [
            (STEP_DEPENDENCIES, StepStatus.APPLIED),
            (STEP_GENERATE_FILES, StepStatus.APPLIED),
            (STEP_REGISTRATION, StepStatus.APPLIED),
        ]

        gradle = (android_root / "app/build.gradle").read_text()
        assert "androidx.credentials:credentials-play-services-auth:1.3.0" in gradle
        assert (android_root / MODULE_DIR / "GoogleCredentialModule.kt").exists()
        assert (android_root / MODULE_DIR / "GoogleCredentialPackage.kt").exists()
        main_app = (android_root / MODULE_DIR / "MainApplication.kt").read_text()
        assert "add(GoogleCredentialPackage())" in main_app

    async def test_second_run_is_noop(self, android_root):
        pipeline = MutationPipeline()
        await pipeline.run(android_root, PACKAGE)
        snapshot = {
            p: p.read_bytes() for p in android_root.rglob("*") if p.is_file()
        }

        result = await pipeline.run(android_root, PACKAGE)

        assert result.success
        assert not result.changed
        assert all(step.status == StepStatus.ALREADY_APPLIED for step in result.steps)
        assert {p: p.read_bytes() for p in android_root.rglob("*") if p.is_file()} == snapshot

    async def test_minimal_descriptor_end_to_end(self, temp_dir):
        """A descriptor holding only the anchor gets exactly three lines after it."""
        (temp_dir / "app").mkdir()
        descriptor = temp_dir / "app" / "build.gradle"
        descriptor.write_text(DEPENDENCY_ANCHOR + "\n")

        result = await MutationPipeline().run(temp_dir, PACKAGE)
        first = descriptor.read_bytes()
        lines = first.decode().splitlines()

        assert lines[0] == DEPENDENCY_ANCHOR
        assert len(lines) == 4
        assert all(line.startswith("    implementation(") for line in lines[1:])

        await MutationPipeline().run(temp_dir, PACKAGE)
        assert descriptor.read_bytes() == first
        # No MainApplication.kt in this tree
        assert result.get_step(STEP_REGISTRATION).status == StepStatus.SKIPPED
        assert result.success

    async def test_missing_anchor_aborts(self, android_root):
        descriptor = android_root / "app/build.gradle"
        descriptor.write_text("dependencies {\n}\n")

        result = await MutationPipeline().run(android_root, PACKAGE)

        assert not result.success
        assert result.state == PipelineState.INIT
        assert result.failed_step == STEP_DEPENDENCIES
        assert _statuses(result) == [(STEP_DEPENDENCIES, StepStatus.FAILED)]
        assert result.steps[0].metadata["structural_mismatch"] is True
        assert descriptor.read_text() == "dependencies {\n}\n"
        assert not (android_root / MODULE_DIR / "GoogleCredentialModule.kt").exists()

    async def test_missing_descriptor_aborts(self, temp_dir):
        result = await MutationPipeline().run(temp_dir, PACKAGE)

        assert not result.success
        assert result.failed_step == STEP_DEPENDENCIES
        assert "build.gradle not found" in result.error

    async def test_unrecognised_bootstrap_continues(self, android_root):
        main_app = android_root / MODULE_DIR / "MainApplication.kt"
        main_app.write_text("class MainApplication : Application()\n")

        result = await MutationPipeline().run(android_root, PACKAGE)

        assert result.success
        assert result.state == PipelineState.DONE
        assert result.get_step(STEP_REGISTRATION).status == StepStatus.SKIPPED
        assert result.warnings
        assert main_app.read_text() == "class MainApplication : Application()\n"

    async def test_generated_files_are_overwritten(self, android_root):
        module = android_root / MODULE_DIR / "GoogleCredentialModule.kt"
        await MutationPipeline().run(android_root, PACKAGE)
        original = module.read_text()
        module.write_text("// edited by hand\n")

        result = await MutationPipeline().run(android_root, PACKAGE)

        assert module.read_text() == original
        step = result.get_step(STEP_GENERATE_FILES)
        assert step.status == StepStatus.APPLIED
        assert step.metadata["changed"] == [f"{MODULE_DIR}/GoogleCredentialModule.kt"]

    async def test_io_failure_is_fatal(self, android_root):
        result = await MutationPipeline(storage_factory=FailingWriteStorage).run(android_root, PACKAGE)

        assert not result.success
        assert result.failed_step == STEP_DEPENDENCIES
        assert "read-only" in result.error

    async def test_blank_package_rejected(self, android_root):
        with pytest.raises(ValidationError):
            await MutationPipeline().run(android_root, "  ")

    async def test_outcomes_carry_targets(self, android_root):
        result = await MutationPipeline().run(android_root, PACKAGE)

        assert result.get_step(STEP_DEPENDENCIES).target == "app/build.gradle"
        assert result.get_step(STEP_GENERATE_FILES).target == MODULE_DIR
        assert result.get_step(STEP_REGISTRATION).target == f"{MODULE_DIR}/MainApplication.kt"
        assert result.completed_at is not None
        assert all(step.duration_seconds >= 0 for step in result.steps)

    async def test_undecodable_descriptor_fails_step(self, android_root):
        descriptor = android_root / "app/build.gradle"
        descriptor.write_bytes(b"\xff\xfe" + DEPENDENCY_ANCHOR.encode())

        result = await MutationPipeline().run(android_root, PACKAGE)

        assert not result.success
        assert result.state == PipelineState.INIT
        assert _statuses(result) == [(STEP_DEPENDENCIES, StepStatus.FAILED)]
        assert "not valid UTF-8" in result.error
        assert descriptor.read_bytes() == b"\xff\xfe" + DEPENDENCY_ANCHOR.encode()
        assert not (android_root / MODULE_DIR / "GoogleCredentialModule.kt").exists()

    async def test_undecodable_bootstrap_is_skipped(self, android_root):
        """An unreadable MainApplication.kt needs a manual fix but does not abort."""
        main_app = android_root / MODULE_DIR / "MainApplication.kt"
        main_app.write_bytes(b"\xff\xfe class MainApplication")

        result = await MutationPipeline().run(android_root, PACKAGE)

        assert result.success
        assert result.state == PipelineState.DONE
        assert result.failed_step is None
        assert _statuses(result) == [
            (STEP_DEPENDENCIES, StepStatus.APPLIED),
            (STEP_GENERATE_FILES, StepStatus.APPLIED),
            (STEP_REGISTRATION, StepStatus.SKIPPED),
        ]
        assert "GoogleCredentialPackage" in result.warnings[0]
        assert main_app.read_bytes() == b"\xff\xfe class MainApplication"

    async def test_crlf_descriptor_keeps_line_endings(self, android_root):
        descriptor = android_root / "app/build.gradle"
        descriptor.write_bytes(descriptor.read_bytes().replace(b"\n", b"\r\n"))

        result = await MutationPipeline().run(android_root, PACKAGE)

        assert result.success
        patched = descriptor.read_bytes()
        assert b"credentials-play-services-auth" in patched
        assert b"\n" not in patched.replace(b"\r\n", b"")
