"""UUID generation utilities.

This is the ONLY module that should import uuid4. User ids are generated
here and nowhere else.
"""

from uuid import uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())
