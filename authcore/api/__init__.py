"""HTTP transport for the authcore domain."""
