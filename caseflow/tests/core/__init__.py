"""Unit tests for core engine logic.

These tests exercise the engines without external dependencies.
The display port is replaced with an in-memory fake from tests/fakes/.
"""
