"""HTTP value types used by the gateway."""
