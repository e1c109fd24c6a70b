"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, vector indices,
model providers, web search, PDF downloads).
"""
