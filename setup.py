"""Setuptools build hooks for ndtensor."""

from __future__ import annotations

from setuptools import setup

# Metadata lives in pyproject.toml; the package is pure Python, so the default
# command classes already produce a ``py3-none-any`` wheel.
setup()
