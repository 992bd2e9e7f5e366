"""Infrastructure: persistence (SQLAlchemy) and security (JWT, password hashing)."""
