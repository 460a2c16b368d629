"""REST API for transcript extraction."""
