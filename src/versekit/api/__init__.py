"""HTTP API for reference parsing and verse retrieval."""
