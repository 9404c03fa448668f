"""Room-scoped publish/subscribe on top of Flask-SocketIO.

Delivery is best-effort and at-most-once: a client that is not connected
when an event is published never sees it, and publish failures are only
logged.
"""
import logging
from typing import Any, Dict, Optional
from schoolgate import socketio

logger = logging.getLogger(__name__)

FRONT_DESK_ROOM = 'front-desk'

# client -> server
EVENT_JOIN_CLASS = 'join-class'
EVENT_JOIN_FRONT_DESK = 'join-frontdesk'
EVENT_RELEASE_DECISION = 'release-decision'

# server -> clients
EVENT_CLASS_UPDATE = 'class-update'
EVENT_RELEASE_REQUEST = 'release-request'
EVENT_RELEASE_OUTCOME = 'release-outcome'
EVENT_PLAN_SAVED = 'plan-saved'

def class_room(class_id: Any) -> str:
    """Room joined by the teacher device of one class."""
    return f'class:{class_id}'

class RealtimeService:
    """Fire-and-forget publishing to rooms."""
    
    @staticmethod
    def publish(event: str, payload: Dict, room: Optional[str] = None) -> bool:
        """Emit ``event`` to ``room`` (or every client when room is None)."""
        try:
            if room is None:
                socketio.emit(event, payload)
            else:
                socketio.emit(event, payload, to=room)
            logger.debug("Published %s to %s", event, room or '*')
            return True
        except Exception:
            logger.warning("Could not publish %s to %s", event, room or '*', exc_info=True)
            return False
    
    @staticmethod
    def notify_class(class_id: Optional[int], event: str, payload: Dict) -> bool:
        """Publish to a class room. Students without a class have no room."""
        if class_id is None:
            logger.info("Skipping %s: student has no class assigned", event)
            return False
        return RealtimeService.publish(event, payload, room=class_room(class_id))
    
    @staticmethod
    def notify_front_desk(event: str, payload: Dict) -> bool:
        return RealtimeService.publish(event, payload, room=FRONT_DESK_ROOM)
    
    @staticmethod
    def broadcast(event: str, payload: Dict) -> bool:
        return RealtimeService.publish(event, payload)
