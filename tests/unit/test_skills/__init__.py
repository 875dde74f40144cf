"""Tests for the skills subsystem.

This package contains cross-cutting tests that verify interactions between
skills components (parser, registry, resolver). Individual module tests are
in tests/unit/test_skill_*.py files.
"""
