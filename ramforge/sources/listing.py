# -*- coding: utf-8 -*-
# Ramforge/ramforge/sources/listing.py

"""
Project: Ramforge
Date: 10/6/2026

Purpose
-------
Object-listing collaborators used by the Makefile generator. Given a RAMSES module
directory name (`amr`, `hydro`, `rt`, ...), a lister returns the object files that
module contributes as one space-separated string.

Abstract / Concrete Classes
---------------------------
- ObjectLister:          interface; instances are callables `lister(module) -> str`.
- DirectoryObjectLister: scans `<root>/<module>/*.f90` on disk.
- StaticObjectLister:    serves listings from a mapping (dry runs, tests).

Notes
-----
- Each object name is followed by one space, so `a.f90 b.f90` yields "a.o b.o ".
  The generator stores the string verbatim.
- Failures (missing directory, unknown module) propagate; there is no fallback.
"""

import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional

__all__ = ["ObjectLister", "DirectoryObjectLister", "StaticObjectLister"]


class ObjectLister(ABC):
    """
    Base interface for object-listing collaborators.

    Any plain callable with the same signature works with the generator as well;
    subclasses only add a name for the behavior.
    """

    @abstractmethod
    def list_objects(self, module: str) -> str:
        """
        Return the object files of `module` as a space-separated string.

        Parameters
        ----------
        module : str
            Module directory name relative to the source root (e.g. "hydro").

        Returns
        -------
        str
            Object names, each followed by a single space ("" if none).
        """
        pass

    def __call__(self, module: str) -> str:
        return self.list_objects(module)


class DirectoryObjectLister(ObjectLister):
    """
    Derive object names from the Fortran 90 sources found in a module directory.

    Parameters
    ----------
    root : str
        RAMSES source root containing the module directories (default "ramses").
    suffix : str
        Source suffix that maps to an object file (default ".f90").
    """

    def __init__(self, root: str = "ramses", suffix: str = ".f90") -> None:
        self.root = str(root)
        self.suffix = suffix

    def list_objects(self, module: str) -> str:
        # Raises FileNotFoundError / NotADirectoryError for a bad module directory.
        names = sorted(os.listdir(os.path.join(self.root, module)))
        stems = [n[:-len(self.suffix)] for n in names if n.endswith(self.suffix)]
        return "".join("{}.o ".format(s) for s in stems)


class StaticObjectLister(ObjectLister):
    """
    Serve listings from a mapping of module name -> object string.

    Parameters
    ----------
    listings : Mapping[str, str]
        Pre-computed listings keyed by module name.
    default : str, optional
        Listing returned for modules missing from `listings`. When None, a missing
        module raises KeyError.
    """

    def __init__(self, listings: Optional[Mapping[str, str]] = None, default: Optional[str] = None) -> None:
        self.listings = dict(listings or {})
        self.default = default

    def list_objects(self, module: str) -> str:
        if module in self.listings:
            return self.listings[module]
        if self.default is None:
            raise KeyError("No object listing for module {!r}".format(module))
        return self.default
