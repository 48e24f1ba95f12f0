from .urllib_transport import UrllibHTTPTransport, ssl_context_for

__all__ = ["UrllibHTTPTransport", "ssl_context_for"]
