"""Gradle project configuration persistence with legacy gradle.prefs migration."""

__version__ = "0.1.0"
