"""Test suite for the caseflow test engine.

Organized into three categories:

1. core/: Unit tests for engine logic
   - No external dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for adapter implementations
   - Validates rendered output

3. fakes/: Port implementations for testing
   - In-memory implementation of DisplayPort
   - Used by core unit tests
"""
