"""Admin account service with JWT access/refresh authentication and role-based access."""
