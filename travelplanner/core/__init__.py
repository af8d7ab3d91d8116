"""Core cross-cutting utilities: exceptions, logging, pagination, security."""
