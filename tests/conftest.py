import io

import pytest

from geschichten import create_app
from geschichten.config import TestConfig
from geschichten.extensions import db
from geschichten.services import accounts

ADMIN_EMAIL = 'admin@example.com'
READER_EMAIL = 'reader@example.com'
PASSWORD = 'correct-horse'


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / 'uploads'


@pytest.fixture()
def app(upload_dir):
    class Config(TestConfig):
        AUDIO_UPLOAD_FOLDER = str(upload_dir)
        MAX_AUDIO_BYTES = 1024

    app = create_app(Config)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture()
def users(app):
    with app.app_context():
        admin_id = accounts.create_user(ADMIN_EMAIL, accounts.hash_password(PASSWORD))
        reader_id = accounts.create_user(READER_EMAIL, accounts.hash_password(PASSWORD))
    return {'admin': admin_id, 'reader': reader_id}


def login(client, email, password=PASSWORD):
    return client.post('/login', data={'email': email, 'password': password})


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_client(app, users):
    client = app.test_client()
    login(client, ADMIN_EMAIL)
    return client


@pytest.fixture()
def reader_client(app, users):
    client = app.test_client()
    login(client, READER_EMAIL)
    return client


def mp3(size=64, name='clip.mp3'):
    return (io.BytesIO(b'ID3' + b'\x00' * (size - 3)), name)


def count(app, model):
    with app.app_context():
        return db.session.query(model).count()


def uploaded_names(upload_dir):
    if not upload_dir.exists():
        return []
    return sorted(p.name for p in upload_dir.iterdir())
