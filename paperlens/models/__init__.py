"""API request/response schemas and service results."""
