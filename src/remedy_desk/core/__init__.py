"""Core wiring: errors, ports, workflow sessions and application state."""
