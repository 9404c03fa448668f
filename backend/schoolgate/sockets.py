# backend/schoolgate/sockets.py
"""Socket.IO event handlers for teacher consoles and front-desk kiosks."""
import logging
from flask import request
from flask_socketio import join_room
from schoolgate import socketio
from schoolgate.services.pickup_service import PickupService
from schoolgate.services.realtime_service import (
    class_room, FRONT_DESK_ROOM,
    EVENT_JOIN_CLASS, EVENT_JOIN_FRONT_DESK, EVENT_RELEASE_DECISION
)
from schoolgate.utils.errors import SchoolGateError

logger = logging.getLogger(__name__)

@socketio.on('connect')
def on_connect():
    logger.info("Socket client connected: %s", request.sid)

@socketio.on(EVENT_JOIN_CLASS)
def on_join_class(class_id):
    """A teacher device tunes into the room of its class."""
    if class_id is None or class_id == '':
        return {'ok': False, 'message': 'Class identifier required'}

    room = class_room(class_id)
    join_room(room)
    logger.info("Client %s joined %s", request.sid, room)
    return {'ok': True, 'room': room}

@socketio.on(EVENT_JOIN_FRONT_DESK)
def on_join_front_desk(*args):
    """A kiosk starts listening for release outcomes."""
    join_room(FRONT_DESK_ROOM)
    logger.info("Client %s joined %s", request.sid, FRONT_DESK_ROOM)
    return {'ok': True, 'room': FRONT_DESK_ROOM}

@socketio.on(EVENT_RELEASE_DECISION)
def on_release_decision(data):
    """Teacher answer to a release request; acknowledged to the sender."""
    logger.info("Release decision received from %s: %s", request.sid, data)
    try:
        outcome = PickupService.decide(data)
    except SchoolGateError as e:
        message = 'Internal server error' if e.is_internal else e.message
        return {'ok': False, 'message': message}

    return {'ok': True, 'outcome': outcome}

@socketio.on('disconnect')
def on_disconnect(*args):
    logger.info("Socket client disconnected: %s", request.sid)
