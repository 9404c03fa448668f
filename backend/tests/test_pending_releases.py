"""Pending release registry, expiry and cancellation."""
import pytest
from datetime import datetime, timedelta
from config.testing import TestingConfig
from schoolgate import create_app, socketio
from schoolgate.services.pickup_service import (
    PendingReleaseRegistry, get_pending_releases, run_release_sweeper
)

class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 3, 2, 16, 0, 0)
    
    def __call__(self):
        return self.now
    
    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)

def test_register_and_remove():
    registry = PendingReleaseRegistry(ttl_seconds=60, clock=FakeClock())
    
    entry = registry.register(1, 'B', 'Guardian of B', 7)
    
    assert entry.expires_at - entry.requested_at == timedelta(seconds=60)
    assert registry.get(1) is entry
    assert registry.remove(1) is entry
    assert registry.get(1) is None
    assert registry.remove(1) is None

def test_register_refreshes_the_same_student():
    clock = FakeClock()
    registry = PendingReleaseRegistry(ttl_seconds=60, clock=clock)
    
    registry.register(1, 'B', 'Mother', 7)
    clock.advance(30)
    registry.register(1, 'B', 'Father', 7)
    
    assert len(registry) == 1
    assert registry.get(1).guardian_name == 'Father'
    assert registry.get(1).expires_at == clock.now + timedelta(seconds=60)

def test_expired_entries_are_purged_and_reported():
    clock = FakeClock()
    expired = []
    registry = PendingReleaseRegistry(ttl_seconds=60, on_expire=expired.append, clock=clock)
    
    registry.register(1, 'B', 'Guardian of B', 7)
    clock.advance(30)
    registry.register(2, 'C', 'Guardian of C', 5)
    clock.advance(31)
    
    assert [entry.student_id for entry in registry.list()] == [2]
    assert [entry.student_id for entry in expired] == [1]
    
    clock.advance(60)
    assert registry.list() == []
    assert [entry.student_id for entry in expired] == [1, 2]

def test_list_is_ordered_by_request_time():
    clock = FakeClock()
    registry = PendingReleaseRegistry(ttl_seconds=600, clock=clock)
    
    registry.register(3, 'C', 'X', None)
    clock.advance(1)
    registry.register(1, 'A', 'Y', None)
    
    assert [entry.student_id for entry in registry.list()] == [3, 1]

def test_expiry_tells_the_front_desk(client, school, front_desk, received):
    clock = FakeClock()
    registry = get_pending_releases()
    registry.clock = clock
    
    client.post('/api/scan', json={'code': 'PAI-456'})
    clock.advance(registry.ttl.total_seconds() + 1)
    
    assert registry.list() == []
    outcomes = received(front_desk, 'release-outcome')
    assert len(outcomes) == 1
    assert outcomes[0]['status'] == 'expirado'
    assert outcomes[0]['student_id'] == school['student_b'].id
    assert outcomes[0]['ok'] is False

def test_pending_endpoint_lists_requests(client, school, teacher_headers):
    client.post('/api/scan', json={'code': 'PAI-456'})
    
    response = client.get('/api/pickups/pending', headers=teacher_headers)
    
    assert response.status_code == 200
    pending = response.get_json()['data']
    assert len(pending) == 1
    assert pending[0]['student_id'] == school['student_b'].id
    assert pending[0]['guardian_name'] == 'Guardian of B'
    assert pending[0]['class_id'] == 7

def test_pending_endpoint_requires_token(client, school):
    assert client.get('/api/pickups/pending').status_code == 401

def test_cancel_pending_request(client, school, teacher_headers, front_desk, received):
    student_id = school['student_b'].id
    client.post('/api/scan', json={'code': 'PAI-456'})
    
    response = client.delete(f'/api/pickups/pending/{student_id}', headers=teacher_headers)
    
    assert response.status_code == 200
    assert get_pending_releases().get(student_id) is None
    outcomes = received(front_desk, 'release-outcome')
    assert outcomes == [{
        'student_id': student_id,
        'student_name': 'B',
        'guardian_name': 'Guardian of B',
        'status': 'cancelado',
        'ok': False
    }]

def test_cancel_unknown_request_is_not_found(client, school, teacher_headers):
    response = client.delete('/api/pickups/pending/12345', headers=teacher_headers)
    
    assert response.status_code == 404

class StopSweeper(Exception):
    pass

def test_sweeper_expires_requests_without_other_traffic(client, school, front_desk, received):
    clock = FakeClock()
    registry = get_pending_releases()
    registry.clock = clock
    client.post('/api/scan', json={'code': 'PAI-456'})
    clock.advance(registry.ttl.total_seconds() * 10)
    naps = []
    
    def nap(seconds):
        naps.append(seconds)
        if len(naps) > 1:
            raise StopSweeper()
    
    with pytest.raises(StopSweeper):
        run_release_sweeper(registry, 5, sleep=nap)
    
    assert naps == [5, 5]
    outcomes = received(front_desk, 'release-outcome')
    assert [outcome['status'] for outcome in outcomes] == ['expirado']
    assert outcomes[0]['student_id'] == school['student_b'].id

def test_sweeper_survives_a_failing_sweep(monkeypatch):
    registry = PendingReleaseRegistry(ttl_seconds=60, clock=FakeClock())
    sweeps = []
    
    def broken_sweep():
        sweeps.append(1)
        raise RuntimeError('boom')
    
    def nap(seconds):
        if len(sweeps) == 2:
            raise StopSweeper()
    
    monkeypatch.setattr(registry, 'sweep', broken_sweep)
    with pytest.raises(StopSweeper):
        run_release_sweeper(registry, 1, sleep=nap)
    
    assert len(sweeps) == 2

def test_app_starts_the_sweeper(monkeypatch):
    started = []
    monkeypatch.setattr(TestingConfig, 'PENDING_RELEASE_SWEEP_SECONDS', 5)
    monkeypatch.setattr(socketio, 'start_background_task', lambda target, *args: started.append((target, args)))
    
    app = create_app('testing')
    
    assert started == [(run_release_sweeper, (app.extensions['pending_releases'], 5))]

def test_sweeper_is_off_when_interval_is_zero(monkeypatch):
    started = []
    monkeypatch.setattr(socketio, 'start_background_task', lambda target, *args: started.append((target, args)))
    
    create_app('testing')
    
    assert started == []
