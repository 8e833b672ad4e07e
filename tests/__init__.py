"""Unit tests for jsonlocalize.

This package contains test modules for all components of the library.
Tests use pytest with tmp_path translation files and monkeypatch for collaborators.
"""
