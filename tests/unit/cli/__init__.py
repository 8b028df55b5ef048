"""
Tests for CLI commands.

Covers matrix rendering, interactive browsing, single-API lookups,
target listing and configuration management.
"""
