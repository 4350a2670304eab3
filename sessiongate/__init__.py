"""
sessiongate - cookie-bound HTTP session lifecycle.

Binds anonymous HTTP clients to server-side sessions through an opaque
cookie-carried identifier and delegates storage to pluggable providers.
"""

__version__ = "1.0.0"
