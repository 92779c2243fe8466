"""Core engine: component model, descriptor grammar, and graph expansion."""
