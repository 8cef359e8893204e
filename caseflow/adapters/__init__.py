"""External adapters for the caseflow test engine.

This package contains the implementations of the core port interfaces
that face the outside world.

Adapter Organization:

- display/: Adapters for rendering finished runs (stdout)
"""
