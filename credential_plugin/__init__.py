"""
credential_plugin: Google Sign-In prebuild plugin for Android projects.

Injects a generated Credential Manager native module into an existing Android
application tree and wires it into the build descriptor and the application
bootstrap, safely re-runnable on every prebuild.
"""

__version__ = "1.0.0"

PLUGIN_NAME = "expo-plugin-google-signin"
