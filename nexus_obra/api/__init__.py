"""HTTP API: routers, endpoint modules and dependency composition."""
