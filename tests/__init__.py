"""
Test suite for the xls_interpreter project.

This module contains all unit tests for the xls_interpreter package.
"""
