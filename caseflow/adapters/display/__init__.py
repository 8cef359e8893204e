"""Display adapters for rendering finished runs.

Implementations consume finished case records and present a pass/fail
summary:
- Stdout (terminal pretty-print)
"""
