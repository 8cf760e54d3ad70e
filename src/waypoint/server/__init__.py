"""Gateway server internals: proxying, error replies, and ASGI sending."""
