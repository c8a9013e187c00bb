"""Test suite for the clispec package.

This package contains unit tests validating identifier rules,
parameter declarations, specification consistency checks, error
formatting, and runtime settings.
"""
