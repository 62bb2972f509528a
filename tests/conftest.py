import random

import httpx
import pytest

from santa_draw import create_app
from santa_draw.client import HttpTransport
from santa_draw.services import FileAssignmentStore, LocalCacheStore

PARTICIPANTS = ["ibo", "adnan", "ahmet"]
CYCLE = {"ibo": "adnan", "adnan": "ahmet", "ahmet": "ibo"}
OTHER_CYCLE = {"ibo": "ahmet", "ahmet": "adnan", "adnan": "ibo"}


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "assignments.json"


@pytest.fixture
def store(data_file, rng):
    return FileAssignmentStore(data_file, PARTICIPANTS, rng=rng)


@pytest.fixture
def cache(tmp_path, rng):
    return LocalCacheStore(tmp_path / "cache.json", PARTICIPANTS, rng=rng)


@pytest.fixture
def app(store, data_file):
    app = create_app({
        "TESTING": True,
        "WTF_CSRF_ENABLED": False,
        "SANTA_DATA_FILE": str(data_file),
        "SANTA_STORE": store,
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


BASE_URL = "http://testserver"


@pytest.fixture
def transport(app):
    """HttpTransport whose httpx client calls the app in-process."""
    calls = []
    http = httpx.Client(
        base_url=BASE_URL,
        transport=httpx.WSGITransport(app=app),
        event_hooks={"request": [lambda req: calls.append((req.method, req.url.path))]},
    )
    transport = HttpTransport(BASE_URL, client=http)
    transport.calls = calls
    yield transport
    transport.close()


def _refuse(request):
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def down_transport():
    transport = HttpTransport(BASE_URL, client=httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(_refuse)))
    yield transport
    transport.close()


@pytest.fixture
def canned_transport():
    """Builds a transport that answers every request with one fixed response."""
    made = []

    def _make(status, **kwargs):
        http = httpx.Client(
            base_url=BASE_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(status, **kwargs)),
        )
        made.append(http)
        return HttpTransport(BASE_URL, client=http)

    yield _make
    for http in made:
        http.close()
