# File: backend/schoolgate/__init__.py
"""School Gate - Application Factory."""
import logging
import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_socketio import SocketIO

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)
socketio = SocketIO()

def create_app(config_name: str = None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Socket handlers must be bound before the Socket.IO server exists
    register_socket_handlers()
    socketio.init_app(
        app,
        cors_allowed_origins=app.config.get('SOCKETIO_CORS_ALLOWED_ORIGINS', '*'),
        message_queue=app.config.get('SOCKETIO_MESSAGE_QUEUE')
    )

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Setup logging
    setup_logging(app)

    # Pending releases live for the lifetime of the process
    setup_pending_releases(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Add CLI commands
    register_commands(app)

    @app.route('/')
    def index():
        return jsonify({
            'error': False,
            'message': 'School Gate server online'
        })

    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'School Gate',
            'version': '1.0.0'
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from schoolgate.api.auth import auth_bp
    from schoolgate.api.teachers import teachers_bp
    from schoolgate.api.classes import classes_bp
    from schoolgate.api.students import students_bp
    from schoolgate.api.gate import gate_bp
    from schoolgate.api.pickups import pickups_bp
    from schoolgate.api.lesson_plans import lesson_plans_bp
    from schoolgate.api.reports import reports_bp

    # Auth
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # Directory
    app.register_blueprint(teachers_bp, url_prefix='/api/teachers')
    app.register_blueprint(classes_bp, url_prefix='/api/classes')
    app.register_blueprint(students_bp, url_prefix='/api/students')

    # Front desk
    app.register_blueprint(gate_bp, url_prefix='/api')
    app.register_blueprint(pickups_bp, url_prefix='/api/pickups')

    # Pedagogy and reporting
    app.register_blueprint(lesson_plans_bp, url_prefix='/api/lesson-plans')
    app.register_blueprint(reports_bp, url_prefix='/api/reports')

def register_socket_handlers() -> None:
    """Import the module that binds the Socket.IO event handlers."""
    from schoolgate import sockets  # noqa: F401

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from schoolgate.utils.helpers import handle_error, gate_error_response
    from schoolgate.utils.errors import SchoolGateError
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(SchoolGateError)
    def handle_gate_error(error):
        if error.is_internal:
            db.session.rollback()
        return gate_error_response(error)

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e, e.code)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return handle_error(error, 500)

    # JWT error handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({
            'error': True,
            'message': 'Token has expired',
            'status_code': 401
        }), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Invalid token',
            'status_code': 401
        }), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Authorization token required',
            'status_code': 401
        }), 401

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.info('School Gate startup')

def setup_pending_releases(app: Flask) -> None:
    """Attach the in-memory registry of releases awaiting a teacher."""
    from schoolgate.services.pickup_service import (
        PendingReleaseRegistry, publish_expired, run_release_sweeper
    )

    registry = PendingReleaseRegistry(
        ttl_seconds=app.config.get('PENDING_RELEASE_TTL_SECONDS', 900),
        on_expire=publish_expired
    )
    app.extensions['pending_releases'] = registry

    # Expiry must not depend on traffic reaching the registry
    interval = app.config.get('PENDING_RELEASE_SWEEP_SECONDS', 5)
    if interval:
        socketio.start_background_task(run_release_sweeper, registry, interval)

def setup_database(app: Flask) -> None:
    """Make every model known to the metadata."""
    with app.app_context():
        from schoolgate.models import (  # noqa: F401
            User, UserRole, SchoolClass, Student, Guardian,
            AccessRecord, MovementKind, LessonPlan
        )

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command()
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command()
    def seed_db():
        """Seed database with sample data."""
        from schoolgate.services.seed_service import SeedService

        try:
            SeedService.seed_all()
            click.echo('Database seeded successfully!')
        except Exception as e:
            db.session.rollback()
            click.echo(f'Error seeding database: {str(e)}')

    @app.cli.command()
    def create_admin():
        """Create school office (admin) user."""
        from schoolgate.services.auth_service import AuthService
        from schoolgate.models.user import UserRole

        email = click.prompt('Admin email')
        name = click.prompt('Admin name')
        password = click.prompt('Password', hide_input=True)

        user, error = AuthService.register(email, password, name, role=UserRole.ADMIN)
        if error:
            click.echo(f'Error creating admin: {error}')
        else:
            click.echo(f"Admin user created: {user['email']}")
