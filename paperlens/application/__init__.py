"""
Application layer: services that coordinate core logic and persistence per request.
"""
