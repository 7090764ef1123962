# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for logarc.

This module collects the foundational utilities shared by logarc commands:
configuration, error types, structured logging, CLI help formatting,
and path and file name helpers.
"""
