"""
Application wiring: lifespan, CORS and middlewares.
"""
