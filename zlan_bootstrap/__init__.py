"""zLAN firewall bootstrap (APT feed setup + post-install hook).

Core design goals:
- Idempotent: reruns replace files, never append
- Fail-fast: every step is a precondition for the next
- Explicit configuration instead of ambient environment
- Centralized logging
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
