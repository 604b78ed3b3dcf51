"""
Import this module first to virtualize the environment:

    import not_env.register  # noqa: F401

The fetch happens at import time; a failure exits the process with status 1.
"""

from __future__ import annotations

from not_env.services.installation import register

environment = register()
