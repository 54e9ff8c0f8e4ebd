"""Domain layer: session record, ports, and the session error taxonomy."""
