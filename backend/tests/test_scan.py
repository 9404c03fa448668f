"""Front-desk scans over HTTP and their room notifications."""
from sqlalchemy.exc import OperationalError
from schoolgate.models import AccessRecord, MovementKind, Guardian, Student
from schoolgate.services.pickup_service import get_pending_releases

def test_student_scan_records_entry_and_notifies_class(client, school, class_console, front_desk, received):
    class_five = class_console(5)
    class_seven = class_console(7)
    
    response = client.post('/api/scan', json={'code': 'ALUNO-123'})
    
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['outcome'] == 'entry'
    assert data['tipo'] == 'entrada'
    assert data['aluno'] == 'A'
    
    records = AccessRecord.query.all()
    assert len(records) == 1
    assert records[0].student_id == school['student_a'].id
    assert records[0].movement is MovementKind.ENTRY
    
    updates = received(class_five, 'class-update')
    assert len(updates) == 1
    assert updates[0]['kind'] == 'ENTRY'
    assert updates[0]['student']['name'] == 'A'
    assert 'timestamp' in updates[0]
    
    assert class_seven.get_received() == []
    assert front_desk.get_received() == []
    assert len(get_pending_releases()) == 0

def test_guardian_scan_requests_release_without_writing(client, school, class_console, front_desk, received):
    class_seven = class_console(7)
    class_five = class_console(5)
    
    response = client.post('/api/scan', json={'code': 'PAI-456'})
    
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['outcome'] == 'awaiting'
    assert data['tipo'] == 'aguardando'
    assert data['aluno'] == 'B'
    assert data['responsavel'] == 'Guardian of B'
    
    assert AccessRecord.query.count() == 0
    
    requests = received(class_seven, 'release-request')
    assert requests == [{
        'student_id': school['student_b'].id,
        'student_name': 'B',
        'guardian_name': 'Guardian of B'
    }]
    assert class_five.get_received() == []
    assert front_desk.get_received() == []
    
    pending = get_pending_releases().get(school['student_b'].id)
    assert pending is not None
    assert pending.guardian_name == 'Guardian of B'
    assert pending.class_id == 7

def test_unregistered_badge_is_rejected(client, school, class_console, front_desk):
    class_five = class_console(5)
    
    response = client.post('/api/scan', json={'code': 'XYZ'})
    
    assert response.status_code == 404
    body = response.get_json()
    assert body['error'] is True
    assert 'not registered' in body['message']
    assert AccessRecord.query.count() == 0
    assert class_five.get_received() == []
    assert front_desk.get_received() == []

def test_missing_code_is_rejected(client, school):
    assert client.post('/api/scan', json={}).status_code == 400
    assert client.post('/api/scan', json={'code': '   '}).status_code == 400
    assert client.post('/api/scan', data='not json').status_code == 400

def test_legacy_qr_code_field_is_accepted(client, school):
    response = client.post('/api/scan', json={'qr_code': 'ALUNO-123'})
    
    assert response.status_code == 200
    assert response.get_json()['data']['outcome'] == 'entry'

def test_every_student_scan_appends_one_entry(client, school):
    for _ in range(3):
        client.post('/api/scan', json={'code': 'ALUNO-123'})
    
    assert AccessRecord.query.filter_by(movement=MovementKind.ENTRY).count() == 3

def test_broken_guardian_link_is_an_opaque_internal_error(client, school):
    Guardian(name='Orphan', badge_code='PAI-999', student_id=9999).save()
    
    response = client.post('/api/scan', json={'code': 'PAI-999'})
    
    assert response.status_code == 500
    assert response.get_json()['message'] == 'Internal server error'

def test_student_without_class_still_enters(client, app):
    Student(name='C', badge_code='ALUNO-1').save()
    
    response = client.post('/api/scan', json={'code': 'ALUNO-1'})
    
    assert response.status_code == 200
    assert response.get_json()['data']['class_id'] is None
    assert AccessRecord.query.count() == 1

def test_entry_write_failure_is_opaque_and_silent(client, school, class_console, monkeypatch):
    class_five = class_console(5)
    
    def failing_append(cls, student_id, movement):
        raise OperationalError('INSERT', {}, Exception('database is locked'))
    
    monkeypatch.setattr(AccessRecord, 'append', classmethod(failing_append))
    response = client.post('/api/scan', json={'code': 'ALUNO-123'})
    monkeypatch.undo()
    
    assert response.status_code == 500
    assert response.get_json()['message'] == 'Internal server error'
    assert AccessRecord.query.count() == 0
    assert class_five.get_received() == []
