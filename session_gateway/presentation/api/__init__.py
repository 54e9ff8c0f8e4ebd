"""FastAPI routers, middleware and error handling."""
