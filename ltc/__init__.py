"""ltc - Lattice CLI: create and scale docker apps on a Lattice cluster"""

__version__ = "1.0.0"
