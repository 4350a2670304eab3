"""API Package - FastAPI routes, middleware, and dependencies.

Components:
- routes: API endpoint routers (health, session)
- middleware: Request logging with correlation IDs
- deps: FastAPI dependency injection functions
- errors: Exception handlers for the sessiongate error hierarchy

Note: Import routers directly from sessiongate.api.routes to avoid circular imports.
"""

__all__ = ["routes", "middleware", "deps", "errors"]
