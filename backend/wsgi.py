"""WSGI configuration for production deployment."""
import os
from schoolgate import create_app, socketio

# Create Flask application instance
app = create_app(os.getenv('FLASK_ENV', 'development'))

if __name__ == "__main__":
    socketio.run(app)
