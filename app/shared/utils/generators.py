"""Fragment id generation (CUID2)."""

from cuid2 import Cuid

FRAGMENT_ID_LENGTH = 24

_fragment_ids = Cuid(length=FRAGMENT_ID_LENGTH)


def generate_fragment_id() -> str:
    """Generate a collision-resistant fragment id.

    CUID2 ids are lowercase alphanumeric, so they are safe as file names
    and URL path segments and never contain the '.' that separates an id
    from a conversion extension.
    """
    return _fragment_ids.generate()
