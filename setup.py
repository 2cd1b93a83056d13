#!/usr/bin/env python
"""A setuptools-based script for installing cmdchain."""

# Note: this is kept for distribution builds that still use the older
#       `setup.py build`/`setup.py install` flow; all of the metadata
#       lives in pyproject.toml.

import setuptools

if __name__ == "__main__":
    setuptools.setup()
