import logging
from typing import Any

from shared.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


def ensure_owner(entity: Any, owner: str, label: str) -> Any:
    """Return ``entity`` if ``owner`` owns it, else raise ``AuthorizationError``."""
    if entity.owner != owner:
        logger.error(
            "%s does not belong to user %r; it belongs to %r", label, owner, entity.owner
        )
        raise AuthorizationError(f"Can not access or interact with another user's {label}.")
    return entity


def last_position(links: list) -> int:
    """Position of the last link in a position-ordered list, or -1 when empty."""
    return links[-1].position if links else -1


def blank_to_none(props: dict[str, Any]) -> dict[str, Any]:
    return {key: None if value == "" else value for key, value in props.items()}
