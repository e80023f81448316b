"""Utility functions for BasicAuth.

Import convention: use module-level imports for clarity.

    from basicauth.utils import isodatetime, uid
    timestamp = isodatetime.now()
    user_id = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
