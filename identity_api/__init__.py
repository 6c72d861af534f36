"""Identity service: user registration, login and token validation."""

__version__ = "1.0.0"
