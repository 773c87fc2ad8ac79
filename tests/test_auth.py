import re

from conftest import ADMIN_EMAIL, PASSWORD, READER_EMAIL, count, login
from geschichten.models import User
from geschichten.services import accounts


def signup(client, email, password='long-enough', confirm=None):
    return client.post('/signup', data={
        'email': email,
        'password': password,
        'confirmPassword': password if confirm is None else confirm,
    })


def error_message(response):
    match = re.search(r'id="form-error">([^<]*)<', response.get_data(as_text=True))
    return match.group(1) if match else None


def test_signup_normalizes_email_and_logs_in(app, client):
    r = signup(client, '  New.User@Example.COM ')

    assert r.status_code == 302
    with app.app_context():
        user = User.query.one()
        assert user.email == 'new.user@example.com'
        assert user.is_admin is False
        assert user.password_hash != 'long-enough'
    with client.session_transaction() as sess:
        assert sess['_user_id'] == str(user.id)


def test_signup_with_admin_email_grants_admin(app, client):
    signup(client, ADMIN_EMAIL.upper())

    with app.app_context():
        assert User.query.one().is_admin is True
    assert client.get('/stories/new').status_code == 200


def test_duplicate_email_is_a_conflict(app, client, users):
    r = signup(client, ' READER@example.com')

    assert r.status_code == 409
    assert error_message(r) == 'An account already exists for that email.'
    assert count(app, User) == 2


def test_signup_validation(app, client):
    assert error_message(signup(client, '', 'x')) == 'Please fill in all fields.'
    assert error_message(signup(client, 'a@b.de', 'long-enough', 'different')) == 'Passwords do not match.'
    r = signup(client, 'a@b.de', 'short')
    assert r.status_code == 400
    assert error_message(r) == 'Password must be at least 8 characters.'
    assert count(app, User) == 0


def test_login_errors_do_not_reveal_which_part_was_wrong(client, users):
    wrong_password = login(client, READER_EMAIL, 'not-the-password')
    unknown_email = login(client, 'nobody@example.com', PASSWORD)

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert error_message(wrong_password) == error_message(unknown_email) == 'Email or password is incorrect.'


def test_login_requires_both_fields(client):
    r = client.post('/login', data={'email': 'a@b.de', 'password': ''})
    assert r.status_code == 400
    assert error_message(r) == 'Please enter your email and password.'


def test_login_is_case_insensitive_and_redirects_home(client, users):
    r = login(client, '  Reader@Example.com')

    assert r.status_code == 302
    assert r.headers['Location'].endswith('/')


def test_login_ignores_offsite_return_path(client, users):
    with client.session_transaction() as sess:
        sess['return_to'] = '//evil.example.com/'

    r = login(client, READER_EMAIL)

    assert r.headers['Location'] == '/'


def test_logged_in_users_skip_login_and_signup_pages(reader_client):
    assert reader_client.get('/login').status_code == 302
    assert reader_client.get('/signup').status_code == 302


def test_logged_in_user_posting_the_login_form_is_still_checked(reader_client):
    r = login(reader_client, READER_EMAIL, 'not-the-password')

    assert r.status_code == 400
    assert error_message(r) == 'Email or password is incorrect.'


def test_logout_ends_session(reader_client):
    r = reader_client.post('/logout')

    assert r.status_code == 302
    assert reader_client.get('/story/1').status_code == 302


def test_admin_role_is_resynchronized(app, users):
    with app.app_context():
        reader = User.query.filter_by(email=READER_EMAIL).one()
        reader.is_admin = True
        accounts.sync_admin_role(ADMIN_EMAIL)
        assert User.query.filter_by(is_admin=True).count() == 1
        assert User.query.filter_by(email=ADMIN_EMAIL).one().is_admin is True


def test_authenticate_returns_user(app, users):
    with app.app_context():
        assert accounts.authenticate(' ADMIN@example.com ', PASSWORD).id == users['admin']
