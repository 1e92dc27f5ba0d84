from typing import Optional, Sequence

from ..core.errors import LocalValidationError

MAX_TAGS = 10
DEFAULT_PAGE_SIZE = 50


def join_tags(tags: Sequence[str]) -> Optional[str]:
    """Comma-join user tags; ``None`` means there is nothing to send."""
    if isinstance(tags, str):
        raise LocalValidationError("tags must be a list of tag names, not a single string")
    count = len(tags)
    if count == 0:
        return None
    if count > MAX_TAGS:
        raise LocalValidationError(f"A maximum of {MAX_TAGS} tags is allowed, got {count}")
    return ",".join(tags)
