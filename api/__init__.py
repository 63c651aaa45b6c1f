"""HTTP routers, exception handlers and middleware."""
