"""Test configuration for credential_plugin."""

import json
import tempfile
from pathlib import Path

import pytest

PACKAGE = "com.example.app"

BUILD_GRADLE = """apply plugin: "com.android.application"
apply plugin: "com.facebook.react"

android {
    namespace "com.example.app"
}

dependencies {
    // The version of react-native is set by the React Native Gradle Plugin
    implementation("com.facebook.react:react-android")

    if (hermesEnabled.toBoolean()) {
        implementation("com.facebook.react:hermes-android")
    } else {
        implementation jscFlavor
    }
}
"""

MAIN_APPLICATION = """package com.example.app

import android.app.Application
import com.facebook.react.PackageList
import com.facebook.react.ReactApplication
import com.facebook.react.ReactPackage

class MainApplication : Application(), ReactApplication {

  override val reactNativeHost: ReactNativeHost = ReactNativeHostWrapper(
        this,
        object : DefaultReactNativeHost(this) {
          override fun getPackages(): List<ReactPackage> =
            PackageList(this).packages.apply {
              // Packages that cannot be autolinked yet can be added manually here, for example:
              // add(MyReactNativePackage())
            }

          override fun getJSMainModuleName(): String = ".expo/.virtual-metro-entry"
        }
  )
}
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def build_gradle_text():
    """A prebuilt app/build.gradle containing the react-android anchor."""
    return BUILD_GRADLE


@pytest.fixture
def main_application_text():
    """An Expo SDK 50 style MainApplication.kt."""
    return MAIN_APPLICATION


@pytest.fixture
def project_dir(temp_dir):
    """Create an Expo project with a prebuilt native android/ tree.

    Returns:
        Path: The project directory (containing app.json and android/).
    """
    android = temp_dir / "android"
    (android / "app").mkdir(parents=True)
    (android / "app" / "build.gradle").write_text(BUILD_GRADLE, encoding="utf-8")

    source_dir = android / "app" / "src" / "main" / "java" / "com" / "example" / "app"
    source_dir.mkdir(parents=True)
    (source_dir / "MainApplication.kt").write_text(MAIN_APPLICATION, encoding="utf-8")

    app_json = {
        "expo": {
            "name": "example",
            "android": {"package": PACKAGE},
            "plugins": [["expo-plugin-google-signin", {"androidPackage": PACKAGE}]],
        }
    }
    (temp_dir / "app.json").write_text(json.dumps(app_json), encoding="utf-8")
    return temp_dir


@pytest.fixture
def android_root(project_dir):
    """The native project root inside project_dir."""
    return project_dir / "android"

