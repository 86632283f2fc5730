import httpx
import openai
import pytest

from backend.modules.garden.taxonomy import SPECIES_IDS, VISUAL_TYPES

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def _status_error(cls, status):
    response = httpx.Response(status, request=httpx.Request("POST", OPENAI_URL))
    return cls(f"Error code: {status}", response=response, body=None)


def test_generate_flower(ai_client):
    response = ai_client.post('/api/generate-flower', json={'message': "I'm so grateful today"})

    assert response.status_code == 200
    assert response.get_json() == {
        'flowerType': 'rose',
        'visualType': 'rose',
        'message': 'Gratitude blooms like a rose',
        'author': 'Anonymous',
    }


@pytest.mark.parametrize("body", [{}, {'message': ''}, {'message': 'a' * 201}, {'message': ' \x00 '}])
def test_generate_flower_rejects_bad_input(ai_client, mock_openai, body):
    response = ai_client.post('/api/generate-flower', json=body)

    assert response.status_code == 400
    assert 'error' in response.get_json()
    mock_openai.chat.completions.create.assert_not_called()


def test_generate_flower_without_key_uses_fallback(client):
    response = client.post('/api/generate-flower', json={'message': 'hello', 'author': 'Ana'})

    data = response.get_json()
    assert response.status_code == 200
    assert data['flowerType'] in SPECIES_IDS
    assert data['visualType'] in VISUAL_TYPES
    assert data['message'] == 'hello'
    assert data['author'] == 'Ana'


def test_rate_limited_provider_maps_to_429(ai_client, mock_openai):
    mock_openai.chat.completions.create.side_effect = _status_error(openai.RateLimitError, 429)

    response = ai_client.post('/api/generate-flower?lang=zh', json={'message': 'hello'})

    assert response.status_code == 429
    assert response.get_json()['error'] == '请求过于频繁，请稍后再试'


def test_quota_maps_to_402(ai_client, mock_openai):
    mock_openai.chat.completions.create.side_effect = _status_error(openai.APIStatusError, 402)

    response = ai_client.post('/api/flowers', json={'message': 'hello'})

    assert response.status_code == 402
    assert response.get_json()['success'] is False


def test_plant_and_list(ai_client):
    planted = ai_client.post('/api/flowers', json={'message': "I'm so grateful today", 'author': 'Ana'})

    assert planted.status_code == 201
    body = planted.get_json()
    record = body['data']
    assert body['success'] is True
    assert record['species'] == 'rose'
    assert record['type'] == 'rose'
    assert record['message'] == 'Gratitude blooms like a rose'
    assert record['mood'] == "I'm so grateful today"
    assert record['author'] == 'Ana'
    assert 10 <= record['x'] <= 90
    assert 65 <= record['y'] <= 90
    assert record['id'] and record['created_at']

    listing = ai_client.get('/api/flowers').get_json()
    assert listing['data']['count'] == 1
    assert listing['data']['flowers'][0]['id'] == record['id']


def test_listing_in_creation_order(client):
    for message in ('one', 'two', 'three'):
        assert client.post('/api/flowers', json={'message': message}).status_code == 201

    flowers = client.get('/api/flowers').get_json()['data']['flowers']

    assert [f['mood'] for f in flowers] == ['one', 'two', 'three']


def test_unexpected_error_is_generic(app, client):
    def explode(*args, **kwargs):
        raise RuntimeError("secret stack detail")

    app.garden_service.plant = explode

    response = client.post('/api/flowers', json={'message': 'hello'})

    assert response.status_code == 500
    assert response.get_json()['error'] == 'Unable to process your request. Please try again later.'
    assert 'secret' not in response.get_data(as_text=True)


def test_stats_endpoint_localized(client):
    client.post('/api/flowers', json={'message': 'hello'})

    response = client.get('/api/garden/stats', headers={'Accept-Language': 'zh-CN,zh;q=0.9'})

    data = response.get_json()['data']
    assert data['total'] == 1
    assert data['level']['key'] == 'sprouting'
    assert data['language'] == 'zh'


def test_species_catalog(client):
    data = client.get('/api/species').get_json()['data']

    assert data['count'] == len(SPECIES_IDS)
    assert all(item['visual_type'] in VISUAL_TYPES for item in data['species'])


def test_garden_status(client):
    data = client.get('/api/garden/status').get_json()['data']

    assert data['classifier']['available'] is False
    assert data['live_feed'] is True


def test_wrong_method_returns_json(client):
    response = client.delete('/api/flowers')
    assert response.status_code == 405
    assert response.get_json()['success'] is False


def test_planting_is_rate_limited(tmp_path):
    from backend.app import create_app
    from backend.rate_limit import limiter

    app = create_app({
        "TESTING": True,
        "DATABASE_URL": "",
        "DATABASE_PATH": str(tmp_path / "limited.db"),
        "AI_API_KEY": "",
        "GEO_ENABLED": False,
        "RATELIMIT_ENABLED": True,
        "PLANT_RATE_LIMIT": "2 per minute",
    })
    limiter.reset()
    client = app.test_client()

    statuses = [client.post('/api/generate-flower', json={'message': 'hi'}).status_code for _ in range(3)]

    assert statuses == [200, 200, 429]
    assert client.post('/api/generate-flower', json={'message': 'hi'}).get_json()['success'] is False


def test_forwarded_for_header_does_not_reset_limit(tmp_path):
    from backend.app import create_app
    from backend.rate_limit import limiter

    app = create_app({
        "TESTING": True,
        "DATABASE_URL": "",
        "DATABASE_PATH": str(tmp_path / "spoofed.db"),
        "AI_API_KEY": "",
        "GEO_ENABLED": False,
        "RATELIMIT_ENABLED": True,
        "PLANT_RATE_LIMIT": "1 per minute",
        "PROXY_FIX_X_FOR": 0,
    })
    limiter.reset()
    client = app.test_client()

    statuses = [
        client.post('/api/flowers', json={'message': 'hi'},
                    headers={'X-Forwarded-For': f'203.0.113.{i}'}).status_code
        for i in range(3)
    ]

    assert statuses == [201, 429, 429]


@pytest.mark.parametrize("body,expected", [
    ({}, '消息必须是非空字符串'),
    ({'message': 'a' * 201}, '消息不能超过200个字符'),
    ({'message': ' \x00 '}, '消息不能为空'),
])
def test_input_errors_are_localized(client, body, expected):
    response = client.post('/api/flowers?lang=zh', json=body)

    assert response.status_code == 400
    assert response.get_json()['error'] == expected


def test_input_errors_default_to_english(client):
    response = client.post('/api/generate-flower', json={'message': '   '})

    assert response.get_json()['error'] == 'Message cannot be empty'
