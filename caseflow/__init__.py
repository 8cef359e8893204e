"""caseflow: an embeddable engine for running cases against callables and classes."""
