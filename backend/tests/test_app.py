import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from exercise_tracker.config import Settings


def _db_down(*_args, **_kwargs):
    raise OperationalError('SELECT', {}, Exception('database is unavailable'))


def test_landing_page(client):
    r = client.get('/')
    assert r.status_code == 200
    assert r.headers['content-type'].startswith('text/html')
    assert 'Exercise tracker' in r.text


def test_static_assets_served(client):
    r = client.get('/public/style.css')
    assert r.status_code == 200
    assert 'body' in r.text


def test_health_and_request_id(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert 'X-Request-ID' in r.headers


def test_request_id_is_propagated(client):
    r = client.get('/api/users', headers={'X-Request-ID': 'abc123'})
    assert r.headers['X-Request-ID'] == 'abc123'


def test_unknown_route_uses_error_envelope(client):
    r = client.get('/api/nothing-here')
    assert r.status_code == 404
    assert r.json() == {'error': 'Not Found'}


def test_wrong_method_uses_error_envelope(client):
    r = client.delete('/api/users')
    assert r.status_code == 405
    assert r.json() == {'error': 'Method Not Allowed'}


def test_store_failure_on_list(client, monkeypatch):
    monkeypatch.setattr('exercise_tracker.repositories.UserRepository.list_all', _db_down)
    r = client.get('/api/users')
    assert r.status_code == 500
    assert r.json() == {'error': 'Error fetching users'}


def test_store_failure_on_create(client, monkeypatch):
    monkeypatch.setattr('exercise_tracker.repositories.UserRepository.create', _db_down)
    r = client.post('/api/users', data={'username': 'alice'})
    assert r.status_code == 500
    assert r.json() == {'error': 'Error creating user'}


def test_store_failure_on_log_lookup(client, make_user, monkeypatch):
    uid = make_user()
    monkeypatch.setattr('exercise_tracker.repositories.UserRepository.get', _db_down)
    r = client.get(f'/api/users/{uid}/logs')
    assert r.status_code == 500
    assert r.json() == {'error': 'Error fetching exercise log'}
    r = client.post(f'/api/users/{uid}/exercises', data={'description': 'run', 'duration': '5'})
    assert r.status_code == 500
    assert r.json() == {'error': 'Error saving exercise'}


def test_unexpected_error_hides_details(client, monkeypatch):
    def boom(*_args, **_kwargs):
        raise RuntimeError('secret internals')
    monkeypatch.setattr('exercise_tracker.repositories.UserRepository.list_all', boom)
    lenient = TestClient(client.app, raise_server_exceptions=False)
    r = lenient.get('/api/users')
    assert r.status_code == 500
    assert r.json() == {'error': 'Internal server error'}


def test_settings_defaults(monkeypatch):
    for name in ('DATABASE_URL', 'PORT', 'HOST', 'LOG_LEVEL', 'ALLOW_DEV_CORS'):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.PORT == 3000
    assert s.HOST == '0.0.0.0'
    assert s.DATABASE_URL.startswith('sqlite:///')
    assert s.ALLOW_DEV_CORS is True


def test_settings_reject_bad_port(monkeypatch):
    monkeypatch.setenv('PORT', '70000')
    with pytest.raises(RuntimeError):
        Settings()
