"""Core domain: entities, store interfaces and exceptions."""
