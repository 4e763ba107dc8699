#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Minimal setup.py for the helix package.

All metadata and dependencies are declared in pyproject.toml; this file only
lets legacy tooling run ``python setup.py develop``.
"""

import setuptools

if __name__ == "__main__":
    # No arguments: setuptools reads the configuration from pyproject.toml
    setuptools.setup()
