"""Tests for adapter implementations.

These tests exercise adapters against in-memory streams to validate
the translation from finished case records to rendered output.
"""
