"""
Setup script for Netstack.

Kept for build tools that still invoke setup.py directly. Project metadata
and dependencies are declared in pyproject.toml; only the version is
supplied here, from the VERSION file.
"""

from pathlib import Path
from setuptools import setup

version = (Path(__file__).parent / "VERSION").read_text().strip()

setup(version=version)
