import json


def test_health_endpoint(client):
    """Test the health check endpoint."""
    response = client.get('/health')

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['status'] == 'ok'
    assert data['healthy'] is True


def test_health_endpoint_has_version(client):
    response = client.get('/health')
    data = json.loads(response.data)

    assert 'version' in data


def test_healthz(client):
    response = client.get('/healthz')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_readyz_checks_database(client):
    response = client.get('/readyz')

    assert response.status_code == 200
    data = response.get_json()
    assert data['ready'] is True
    assert data['database'] == 'ok'
    assert data['ai_available'] is False


def test_readyz_reports_unavailable_database(app, client):
    app.database.ping = lambda: False

    response = client.get('/readyz')

    assert response.status_code == 503
    assert response.get_json()['ready'] is False


def test_unknown_route_returns_json_404(client):
    response = client.get('/api/nope')

    assert response.status_code == 404
    assert response.get_json()['success'] is False
