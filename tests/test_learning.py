from sqlalchemy.exc import SQLAlchemyError

from conftest import count
from geschichten.models import GrammarTopic, VocabularyEntry
from geschichten.services import content


def test_listings_are_public(client):
    assert client.get('/learning/vocabulary').status_code == 200
    assert client.get('/learning/grammar').status_code == 200


def test_forms_require_admin(client, reader_client, users):
    r = client.get('/learning/vocabulary/new')
    assert r.status_code == 302
    with client.session_transaction() as sess:
        assert sess['return_to'] == '/learning/vocabulary/new'

    assert reader_client.get('/learning/grammar/new').status_code == 403
    assert reader_client.post('/learning/vocabulary', data={'term': 'a', 'translation': 'b'}).status_code == 403
    assert reader_client.post('/learning/grammar', data={'title': 'a', 'explanation': 'b'}).status_code == 403


def test_vocabulary_entry_is_saved(app, admin_client, users):
    r = admin_client.post('/learning/vocabulary', data={
        'term': ' der Mond ', 'translation': 'the moon', 'exampleSentence': '   ',
    })

    assert r.status_code == 200
    assert 'Vocabulary entry saved successfully.' in r.get_data(as_text=True)
    with app.app_context():
        entry = VocabularyEntry.query.one()
        assert entry.term == 'der Mond'
        assert entry.example_sentence is None
        assert entry.author_id == users['admin']


def test_vocabulary_requires_term_and_translation(app, admin_client):
    r = admin_client.post('/learning/vocabulary', data={'term': 'der Mond', 'translation': ' '})

    assert r.status_code == 400
    body = r.get_data(as_text=True)
    assert 'Please provide both the German term and its translation.' in body
    assert 'value="der Mond"' in body
    assert count(app, VocabularyEntry) == 0


def test_grammar_topic_is_saved_and_listed(app, admin_client, client):
    r = admin_client.post('/learning/grammar', data={
        'title': 'Der Dativ', 'explanation': '<p>Wem?</p>',
    })

    assert r.status_code == 200
    assert 'Grammar topic saved successfully.' in r.get_data(as_text=True)
    body = client.get('/learning/grammar').get_data(as_text=True)
    assert 'Der Dativ' in body
    assert '<p>Wem?</p>' in body


def test_grammar_requires_title_and_explanation(app, admin_client):
    r = admin_client.post('/learning/grammar', data={'title': '', 'explanation': 'x'})

    assert r.status_code == 400
    assert 'Please provide a title and explanation for the grammar topic.' in r.get_data(as_text=True)
    assert count(app, GrammarTopic) == 0


def test_database_failure_shows_generic_error_page(app, admin_client, monkeypatch):
    def failing_insert(fields, author_id, tx=None):
        raise SQLAlchemyError('secret connection string')

    monkeypatch.setitem(app.config, 'PROPAGATE_EXCEPTIONS', False)
    monkeypatch.setattr(content, 'insert_vocabulary_entry', failing_insert)

    r = admin_client.post('/learning/vocabulary', data={'term': 'der Mond', 'translation': 'the moon'})

    assert r.status_code == 500
    body = r.get_data(as_text=True)
    assert 'An unexpected error occurred.' in body
    assert 'secret' not in body
    assert count(app, VocabularyEntry) == 0
