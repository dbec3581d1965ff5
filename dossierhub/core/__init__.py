"""Core: settings, exception handlers, application lifespan."""
