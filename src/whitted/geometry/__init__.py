"""Geometric primitives.

Importing this package registers the built-in primitive types so that
scene documents can refer to them by tag:

    sphere: Center and radius
    quad: Parallelogram from a corner and two edge vectors
"""

from .thing import THING_TYPES, Thing, register_thing, thing_from_dict
from .quad import Quad
from .sphere import Sphere

__all__ = [
    "Thing",
    "THING_TYPES",
    "register_thing",
    "thing_from_dict",
    "Sphere",
    "Quad",
]
