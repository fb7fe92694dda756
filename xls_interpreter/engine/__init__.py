"""
Engine module for sheet layout.

Scale computation, merged-region resolution, row-major layout of cells and
placement of floating pictures.
"""
