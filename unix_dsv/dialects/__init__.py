"""
Dialect definitions sub-package for unix-dsv.

Contains YAML files that define separator/escape pairs for known DSV
dialects. The loader module (dialect_registry.py in the parent package)
reads these files at runtime.
"""
