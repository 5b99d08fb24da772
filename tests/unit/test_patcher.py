"""Unit tests for the idempotent text patches."""

from credential_plugin.core.types import StepStatus
from credential_plugin.services.patcher import (
    DEPENDENCY_ANCHOR,
    apply_dependency_patch,
    apply_registration_patch,
)

EXPECTED_DEPENDENCIES = [
    'implementation("androidx.credentials:credentials:1.3.0")',
    'implementation("androidx.credentials:credentials-play-services-auth:1.3.0")',
    'implementation("com.google.android.libraries.identity.googleid:googleid:1.1.1")',
]

LEGACY_MAIN_APPLICATION = """class MainApplication : Application(), ReactApplication {
    override fun getPackages(): List<ReactPackage> {
        val packages = PackageList(this).packages
        // Packages that cannot be autolinked yet can be added manually here
        return packages
    }
}
"""


class TestDependencyPatch:
    """Tests for the build.gradle patch."""

    def test_inserts_three_lines_after_anchor(self, build_gradle_text):
        result = apply_dependency_patch(build_gradle_text)

        assert result.applied
        assert result.status == StepStatus.APPLIED
        lines = result.text.splitlines()
        anchor_index = next(i for i, line in enumerate(lines) if DEPENDENCY_ANCHOR in line)
        assert [line.strip() for line in lines[anchor_index + 1:anchor_index + 4]] == EXPECTED_DEPENDENCIES

    def test_rest_of_file_untouched(self, build_gradle_text):
        result = apply_dependency_patch(build_gradle_text)
        removed = result.text
        for line in EXPECTED_DEPENDENCIES:
            removed = removed.replace(f"\n    {line}", "", 1)
        assert removed == build_gradle_text

    def test_idempotent(self, build_gradle_text):
        once = apply_dependency_patch(build_gradle_text)
        twice = apply_dependency_patch(once.text)

        assert twice.text == once.text
        assert not twice.applied
        assert twice.status == StepStatus.ALREADY_APPLIED

    def test_marker_detects_manual_integration(self):
        text = 'dependencies {\n    implementation "androidx.credentials:credentials:1.2.0"\n}\n'
        result = apply_dependency_patch(text)
        assert result.text == text
        assert result.status == StepStatus.ALREADY_APPLIED

    def test_missing_anchor_is_fatal(self):
        text = "dependencies {\n    implementation 'com.facebook.react:react-native:+'\n}\n"
        result = apply_dependency_patch(text)

        assert result.text == text
        assert not result.applied
        assert result.status == StepStatus.FAILED
        assert result.is_fatal

    def test_only_first_anchor_is_patched(self):
        text = f"{DEPENDENCY_ANCHOR}\n{DEPENDENCY_ANCHOR}\n"
        result = apply_dependency_patch(text)
        assert result.text.count("androidx.credentials:credentials:1.3.0") == 1

    def test_minimal_descriptor(self):
        result = apply_dependency_patch(DEPENDENCY_ANCHOR + "\n")
        assert result.text == DEPENDENCY_ANCHOR + "".join(f"\n    {d}" for d in EXPECTED_DEPENDENCIES) + "\n"


class TestRegistrationPatch:
    """Tests for the MainApplication.kt patch."""

    def test_registers_inside_apply_block(self, main_application_text):
        result = apply_registration_patch(main_application_text)

        assert result.applied
        assert result.status == StepStatus.APPLIED
        block = result.text[result.text.index("PackageList(this).packages.apply {"):]
        block = block[:block.index("}") + 1]
        assert "add(GoogleCredentialPackage())" in block
        assert result.text.count("GoogleCredentialPackage") == 1

    def test_keeps_existing_entries(self):
        text = (
            "PackageList(this).packages.apply {\n"
            "      add(OtherPackage())\n"
            "    }\n"
        )
        result = apply_registration_patch(text)
        assert result.text == (
            "PackageList(this).packages.apply {\n"
            "      add(OtherPackage())\n"
            "      // Google Sign-In via Credential Manager (expo-plugin-google-signin)\n"
            "      add(GoogleCredentialPackage())\n"
            "    }\n"
        )

    def test_empty_block(self):
        result = apply_registration_patch("PackageList(this).packages.apply {}")
        assert result.applied
        assert "\n  add(GoogleCredentialPackage())\n}" in result.text

    def test_idempotent(self, main_application_text):
        once = apply_registration_patch(main_application_text)
        twice = apply_registration_patch(once.text)

        assert twice.text == once.text
        assert twice.status == StepStatus.ALREADY_APPLIED
        assert not twice.applied

    def test_legacy_assignment_layout(self):
        result = apply_registration_patch(LEGACY_MAIN_APPLICATION)

        assert result.applied
        assert (
            "        val packages = PackageList(this).packages\n"
            "        packages.add(GoogleCredentialPackage())\n"
        ) in result.text
        assert apply_registration_patch(result.text).text == result.text

    def test_unrecognised_layout_is_soft(self):
        text = "class MainApplication : Application() {\n}\n"
        result = apply_registration_patch(text)

        assert result.text == text
        assert not result.applied
        assert result.status == StepStatus.SKIPPED
        assert not result.is_fatal
        assert "manually" in result.message


class TestLineEndings:
    """CRLF files keep CRLF line endings after patching."""

    def test_dependency_patch_on_crlf_descriptor(self, build_gradle_text):
        crlf = build_gradle_text.replace("\n", "\r\n")
        result = apply_dependency_patch(crlf)

        assert result.applied
        assert "\n" not in result.text.replace("\r\n", "")
        assert result.text.count("\r\n") == crlf.count("\r\n") + 3
        assert apply_dependency_patch(result.text).text == result.text

    def test_registration_patch_on_crlf_bootstrap(self, main_application_text):
        crlf = main_application_text.replace("\n", "\r\n")
        result = apply_registration_patch(crlf)

        assert result.applied
        assert "\n" not in result.text.replace("\r\n", "")
        assert "\r\n              add(GoogleCredentialPackage())\r\n" in result.text

    def test_legacy_layout_on_crlf_bootstrap(self):
        crlf = LEGACY_MAIN_APPLICATION.replace("\n", "\r\n")
        result = apply_registration_patch(crlf)

        assert result.applied
        assert (
            "        val packages = PackageList(this).packages\r\n"
            "        packages.add(GoogleCredentialPackage())\r\n"
        ) in result.text
        assert "\n" not in result.text.replace("\r\n", "")
