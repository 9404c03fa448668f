"""Helper functions for the application."""
from flask import jsonify
from typing import Any

INTERNAL_ERROR_MESSAGE = 'Internal server error'

def handle_error(error, status_code: int):
    """Handle application errors with consistent format."""
    message = INTERNAL_ERROR_MESSAGE if status_code >= 500 else getattr(error, 'description', str(error))
    return jsonify({
        'error': True,
        'message': message,
        'status_code': status_code
    }), status_code

def success_response(data: Any = None, message: str = "Success"):
    """Return consistent success response."""
    response = {
        'error': False,
        'message': message
    }
    
    if data is not None:
        response['data'] = data
    
    return jsonify(response)

def error_response(message: str, status_code: int = 400):
    """Return consistent error response."""
    return jsonify({
        'error': True,
        'message': message,
        'status_code': status_code
    }), status_code

def gate_error_response(error):
    """Render a SchoolGateError; internal ones stay opaque."""
    if error.is_internal:
        return error_response(INTERNAL_ERROR_MESSAGE, error.status_code)
    return error_response(error.message, error.status_code)
