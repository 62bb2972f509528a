from conftest import CYCLE, OTHER_CYCLE


def _check(client, value):
    return client.post("/", data={"value": value})


def test_landing_renders_form(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"<form" in resp.data
    assert "sıfırla".encode() in resp.data


def test_lookup_without_draw_does_not_create_one(client, store):
    resp = _check(client, "ibo")
    assert resp.status_code == 200
    assert b"No saved draw" in resp.data
    assert store.get() is None


def test_lookup_shows_only_own_recipient(client, store):
    store.save(CYCLE)
    resp = _check(client, "  IBO ")
    text = resp.get_data(as_text=True)
    assert "Ibo &rarr; Adnan" in text
    assert "Ahmet &rarr;" not in text


def test_reset_keyword_redraws(client, store):
    store.save(CYCLE)
    resp = _check(client, "sıfırla")
    assert resp.status_code == 200
    assert b"New draw created and saved." in resp.data
    assert store.get() == OTHER_CYCLE


def test_invalid_input(client):
    assert b"Input cannot be empty." in _check(client, "   ").data
    assert b"at least 3 characters" in _check(client, "ab").data
    resp = _check(client, "<script>")
    assert resp.status_code == 400
    assert b"invalid characters" in resp.data


def test_other_valid_text(client, store):
    resp = _check(client, "merhaba dünya")
    assert resp.status_code == 200
    assert b"Input is valid." in resp.data
    assert store.get() is None


def test_csrf_enforced_on_form_but_not_api(store, data_file):
    from santa_draw import create_app

    app = create_app({"TESTING": True, "SANTA_STORE": store, "SANTA_DATA_FILE": str(data_file)})
    client = app.test_client()

    assert client.post("/", data={"value": "sıfırla"}).status_code == 400
    assert store.get() is None
    assert client.post("/api/assignments/reset").status_code == 200
