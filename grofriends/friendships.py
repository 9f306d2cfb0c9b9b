"""
Friendship state machine.

    absent --invite--> pending --accept--> accepted
    pending | accepted --remove/cancel--> absent

There is no rejected state; declining an invite deletes the row.
"""
import logging
from typing import List

from email_validator import validate_email, EmailNotValidError

from . import social_graph
from .core import FRIENDSHIP_TRANSITIONS
from .crud import get_user_by_email
from .errors import NotFound, InvalidOperation, Conflict, Forbidden
from .models.friendships import Friendship, PENDING

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    email = (email or '').strip().lower()
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise InvalidOperation('Invalid email')
    return email


async def invite(requester_id: int, target_email: str) -> Friendship:
    email = normalize_email(target_email)
    other = await get_user_by_email(email)
    if not other:
        raise NotFound('User not found')
    if other.id == requester_id:
        raise InvalidOperation('Cannot invite yourself')

    existing = await social_graph.find_pair(requester_id, other.id)
    if existing:
        raise Conflict('Already invited or friends', status=existing.status)

    # a concurrent invite for the same pair loses on the unique constraint
    f = await social_graph.insert_pending(requester_id, other.id)
    FRIENDSHIP_TRANSITIONS.labels(transition='invite').inc()
    logger.info({'msg': 'friend_invite', 'friendship_id': f.id, 'requested_by': requester_id, 'to': other.id})
    return f


async def _load_for_party(acting_user_id: int, friendship_id: int) -> Friendship:
    f = await social_graph.get_friendship(friendship_id)
    if not f:
        raise NotFound('Not found')
    if acting_user_id not in (f.user_a, f.user_b):
        raise Forbidden('Forbidden')
    return f


async def accept(acting_user_id: int, friendship_id: int) -> Friendship:
    # either party may accept, including the requester
    f = await _load_for_party(acting_user_id, friendship_id)
    if not await social_graph.mark_accepted(f.id):
        raise NotFound('Not found')
    FRIENDSHIP_TRANSITIONS.labels(transition='accept').inc()
    logger.info({'msg': 'friend_accept', 'friendship_id': f.id, 'by': acting_user_id})
    return f


async def remove(acting_user_id: int, friendship_id: int) -> None:
    """Cancel an outgoing invite, decline an incoming one, or unfriend."""
    f = await _load_for_party(acting_user_id, friendship_id)
    if not await social_graph.delete_friendship(f.id):
        raise NotFound('Not found')
    FRIENDSHIP_TRANSITIONS.labels(transition='remove').inc()
    logger.info({'msg': 'friend_remove', 'friendship_id': f.id, 'by': acting_user_id, 'was': f.status})


async def list_for_user(user_id: int) -> List[dict]:
    rows = await social_graph.list_touching(user_id)
    return [
        {
            'friendship_id': f.id,
            'other_user_id': other_id,
            'other_name': other_name,
            'other_email': other_email,
            'status': f.status,
            'requested_by': f.requested_by,
            'can_accept': f.status == PENDING and f.requested_by != user_id,
        }
        for f, other_id, other_name, other_email in rows
    ]
