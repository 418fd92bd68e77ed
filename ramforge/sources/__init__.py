# -*- coding: utf-8 -*-
# Ramforge/ramforge/sources/__init__.py

"""
Project: Ramforge
Date: 10/6/2026

Modules
-------
- listing:  Object-listing collaborators (module directory -> "a.o b.o ").
            Directory scan of *.f90 sources, or a static mapping for dry runs.
"""

from .listing import ObjectLister, DirectoryObjectLister, StaticObjectLister

__all__ = [
    "ObjectLister",
    "DirectoryObjectLister",
    "StaticObjectLister",
]
