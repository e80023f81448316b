"""BasicAuth: registration, login, security-question recovery and a protected user listing."""

__version__ = "0.1.0"
