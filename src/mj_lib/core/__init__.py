# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for mj.

This module collects the foundational classes, utilities, and helpers used
across the mj codebase: configuration, error types, structured logging,
per-item error isolation, and CLI help formatting.
"""
