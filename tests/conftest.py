import pytest

from treeguessr import create_app
from treeguessr.config import TestingConfig


@pytest.fixture
def word_list(tmp_path):
    path = tmp_path / "wordlist.txt"
    path.write_text("oak tree\n", encoding="utf-8")
    return path


def _make_app(tmp_path, word_list_path):
    class Config(TestingConfig):
        WORD_LIST_PATH = str(word_list_path)
        LOG_DIR = str(tmp_path / "logs")

    app, _ = create_app(Config)
    return app


@pytest.fixture
def app(tmp_path, word_list):
    return _make_app(tmp_path, word_list)


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def missing_word_list(tmp_path):
    return tmp_path / "not-there.txt"


@pytest.fixture
def inert_app(tmp_path, missing_word_list):
    return _make_app(tmp_path, missing_word_list)


@pytest.fixture
def socket_client(app):
    client = app.socketio.test_client(app)
    yield client
    if client.is_connected():
        client.disconnect()
