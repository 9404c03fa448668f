"""Shared fixtures: app, HTTP client, socket clients and sample school."""
import pytest
from flask_jwt_extended import create_access_token
from schoolgate import create_app, db, socketio
from schoolgate.models import User, UserRole, SchoolClass, Student, Guardian

@pytest.fixture
def app():
    """Create test app."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture
def admin(app):
    user = User(email='secretaria@escola.com', name='Secretaria', role=UserRole.ADMIN)
    user.set_password('admin123')
    return user.save()

@pytest.fixture
def teacher(app):
    user = User(email='ana@escola.com', name='Ana Souza', role=UserRole.TEACHER)
    user.set_password('prof123')
    return user.save()

@pytest.fixture
def admin_headers(admin):
    token = create_access_token(identity=str(admin.id))
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture
def teacher_headers(teacher):
    token = create_access_token(identity=str(teacher.id))
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture
def school(app, teacher):
    """Student A in class 5 and student B (with guardian) in class 7."""
    class_five = SchoolClass(id=5, name='Infantil 5', teacher_id=teacher.id).save()
    class_seven = SchoolClass(id=7, name='Infantil 7').save()
    
    student_a = Student(name='A', class_id=class_five.id, badge_code='ALUNO-123').save()
    student_b = Student(name='B', class_id=class_seven.id, badge_code='ALUNO-789').save()
    guardian_b = Guardian(
        name='Guardian of B',
        phone='11999990000',
        badge_code='PAI-456',
        student_id=student_b.id
    ).save()
    
    return {
        'class_five': class_five,
        'class_seven': class_seven,
        'student_a': student_a,
        'student_b': student_b,
        'guardian_b': guardian_b
    }

@pytest.fixture
def socket_client(app):
    """Factory of connected Socket.IO test clients, disconnected afterwards."""
    clients = []
    
    def connect():
        sio = socketio.test_client(app)
        assert sio.is_connected()
        clients.append(sio)
        return sio
    
    yield connect
    
    for sio in clients:
        if sio.is_connected():
            sio.disconnect()

@pytest.fixture
def class_console(socket_client):
    """Factory: teacher console joined to a class room."""
    def join(class_id):
        sio = socket_client()
        ack = sio.emit('join-class', class_id, callback=True)
        assert ack['ok'] is True
        sio.get_received()
        return sio
    return join

@pytest.fixture
def front_desk(socket_client):
    """Kiosk joined to the front-desk room."""
    sio = socket_client()
    ack = sio.emit('join-frontdesk', callback=True)
    assert ack['ok'] is True
    sio.get_received()
    return sio

@pytest.fixture
def received():
    """Drain a socket client and return the payloads of one event."""
    def drain(sio, name):
        return [message['args'][0] for message in sio.get_received() if message['name'] == name]
    return drain
