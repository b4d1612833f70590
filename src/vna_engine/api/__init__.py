"""HTTP API wrapping parse, validate and summary."""
