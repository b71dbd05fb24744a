"""
Tests for the signup settings form and the form renderer.
Run with: pytest tests/test_signup_form.py -v
"""

from unittest.mock import MagicMock

import pytest
from werkzeug.datastructures import MultiDict

from ethereum_signup.modules.signup_admin import (
    FormRenderer, SignupSettings, SignupSettingsForm, classify, expand
)
from ethereum_signup.modules.signup_admin.defaults import SETTINGS_NAMESPACE
from ethereum_signup.modules.signup_admin.fields import (
    CHECKBOX, RADIOS, SELECT, TEXTAREA, TEXTFIELD, Field, FieldSet, Section
)


@pytest.fixture
def form(ext):
    return SignupSettingsForm(ext.store, ext.roles)


# ---------------------------------------------------------------------------
# classify / expand
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('admin,mail,expected', [
    (True, False, 'admin_confirm'),
    (False, True, 'email_confirm'),
    (False, False, 'visitors'),
    (True, True, 'admin_confirm'),
    (None, None, 'visitors'),
])
def test_classify(admin, mail, expected):
    assert classify(admin, mail) == expected


@pytest.mark.parametrize('admin,mail', [(True, False), (False, True), (False, False)])
def test_expand_reverses_classify(admin, mail):
    assert expand(classify(admin, mail)) == (mail, admin)


@pytest.mark.parametrize('selection', ['admin_confirm', 'everyone', '', None, 'VISITORS'])
def test_expand_defaults_to_admin_approval(selection):
    assert expand(selection) == (False, True)


# ---------------------------------------------------------------------------
# Fieldset
# ---------------------------------------------------------------------------

def test_fieldset_layout(app, form):
    with app.app_context():
        fieldset = form.build_fieldset()

    assert fieldset.form_id == 'ethereum_signup_admin'
    assert [s.title for s in fieldset.sections] == [
        'Signup settings', 'Registration Role', 'Registration text', 'Login text'
    ]
    assert fieldset.names() == [
        'require_mail', 'user_ethereum_register', 'ui_visible_without_web3', 'login_redirect',
        'register_role', 'register_link_text', 'register_terms_text',
        'login_link_text', 'login_welcome_text',
    ]

    required = {f.name for f in fieldset.iter_fields() if f.required}
    assert required == {
        'login_redirect', 'register_link_text', 'register_terms_text',
        'login_link_text', 'login_welcome_text',
    }


def test_fieldset_defaults_from_settings(form):
    settings = {
        'require_mail': True,
        'require_mail_confirm': False,
        'require_admin_confirm': False,
        'ui_visible_without_web3': False,
        'login_redirect': '/home',
        'register_role': 'administrator',
        'register_link_text': 'a',
        'register_terms_text': 'b',
        'login_link_text': 'c',
        'login_welcome_text': 'd',
    }
    fieldset = form.build_fieldset(settings)

    assert fieldset.get('user_ethereum_register').default == 'visitors'
    assert fieldset.get('user_ethereum_register').kind == RADIOS
    assert fieldset.get('ui_visible_without_web3').default is False
    assert fieldset.get('login_redirect').default == '/home'
    assert fieldset.get('register_role').default == 'administrator'


def test_role_options_exclude_anonymous(form):
    role_field = form.build_fieldset({}).get('register_role')
    assert role_field.kind == SELECT
    assert role_field.empty_value == ''
    assert 'anonymous' not in role_field.options
    assert role_field.options['authenticated'] == 'Authenticated user'


def test_build_fieldset_has_no_side_effects(form):
    form.store = MagicMock()
    form.build_fieldset({'require_admin_confirm': True})
    form.store.get_editable.assert_not_called()
    form.store.get.assert_not_called()


def test_validate_adds_nothing(form):
    assert form.validate({'login_redirect': 'not a path'}) == {}


# ---------------------------------------------------------------------------
# Submit
# ---------------------------------------------------------------------------

def _values(**overrides):
    values = {
        'require_mail': False,
        'user_ethereum_register': 'visitors',
        'ui_visible_without_web3': True,
        'login_redirect': '/user',
        'register_role': '',
        'register_link_text': 'Register',
        'register_terms_text': 'Terms',
        'login_link_text': 'Login',
        'login_welcome_text': 'Welcome',
    }
    values.update(overrides)
    return values


@pytest.mark.parametrize('selection', ['visitors', 'email_confirm', 'admin_confirm', 'bogus'])
def test_submit_never_sets_both_confirm_flags(app, form, selection):
    with app.app_context():
        form.submit(_values(user_ethereum_register=selection))
        stored = form.store.get(SETTINGS_NAMESPACE)

    assert not (stored['require_mail_confirm'] and stored['require_admin_confirm'])
    if stored['require_mail_confirm']:
        assert stored['require_mail'] is True


def test_submit_writes_whitelist_and_saves_once(app):
    editable = MagicMock()
    store = MagicMock()
    store.get_editable.return_value = editable
    form = SignupSettingsForm(store, MagicMock())

    with app.app_context():
        form.submit(_values(extra='dropped', user_ethereum_register='email_confirm'))

    store.get_editable.assert_called_once_with(SETTINGS_NAMESPACE)
    written = {call.args[0]: call.args[1] for call in editable.set.call_args_list}
    assert set(written) == {
        'require_mail', 'require_mail_confirm', 'require_admin_confirm', 'login_redirect',
        'ui_visible_without_web3', 'register_role', 'register_link_text',
        'register_terms_text', 'login_link_text', 'login_welcome_text',
    }
    assert written['require_mail'] is True
    assert written['require_mail_confirm'] is True
    assert written['require_admin_confirm'] is False
    editable.save.assert_called_once_with()


def test_submit_does_not_mutate_input(app, form):
    values = _values()
    with app.app_context():
        form.submit(values)
    assert values['user_ethereum_register'] == 'visitors'
    assert 'require_mail_confirm' not in values


def test_signup_settings_from_values_coerces_types():
    settings = SignupSettings.from_values({'require_mail': 1, 'login_redirect': None, 'other': 'x'})
    assert settings.require_mail is True
    assert settings.require_admin_confirm is False
    assert settings.login_redirect == ''
    assert 'other' not in settings.as_dict()


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

@pytest.fixture
def small_fieldset():
    return FieldSet('test_form', [
        Section('main', 'Main', [
            Field('flag', CHECKBOX, 'Flag'),
            Field('choice', RADIOS, 'Choice', options={'a': 'A', 'b': 'B'}),
            Field('title', TEXTFIELD, 'Title', required=True),
            Field('body', TEXTAREA, 'Body', required=True),
        ]),
    ])


@pytest.mark.parametrize('raw,expected', [
    ('1', True), ('on', True), ('true', True),
    ('0', False), ('', False), ('off', False), ('false', False), (None, False),
])
def test_extract_checkbox(small_fieldset, raw, expected):
    data = MultiDict({'flag': raw}) if raw is not None else MultiDict()
    assert FormRenderer.extract_values(small_fieldset, data)['flag'] is expected


def test_extract_keeps_unknown_radio_value_and_drops_undeclared(small_fieldset):
    values = FormRenderer.extract_values(small_fieldset, MultiDict({
        'choice': 'zzz', 'title': '  Hello  ', 'undeclared': 'x'
    }))
    assert values == {'flag': False, 'choice': 'zzz', 'title': 'Hello', 'body': ''}


def test_extract_strips_textfields_but_keeps_textareas_as_entered(small_fieldset):
    values = FormRenderer.extract_values(small_fieldset, MultiDict({
        'title': ' Hello ', 'body': '  First line\n\nSecond line\n'
    }))
    assert values['title'] == 'Hello'
    assert values['body'] == '  First line\n\nSecond line\n'


def test_whitespace_only_textarea_is_still_missing(small_fieldset):
    errors = FormRenderer.check_required(small_fieldset, {'title': 'x', 'body': ' \n '})
    assert errors == {'body': 'Body field is required.'}


def test_check_required(small_fieldset):
    errors = FormRenderer.check_required(small_fieldset, {'title': ' ', 'body': 'text'})
    assert errors == {'title': 'Title field is required.'}


def test_process_blocks_submit_on_errors(small_fieldset):
    form = MagicMock()
    form.validate.return_value = {}

    result = FormRenderer.process(form, MultiDict({'title': 'x'}), fieldset=small_fieldset)

    assert result.submitted is False
    assert set(result.errors) == {'body'}
    form.submit.assert_not_called()


def test_process_surfaces_form_validation_errors(small_fieldset):
    form = MagicMock()
    form.validate.return_value = {'title': 'Taken.'}

    result = FormRenderer.process(form, MultiDict({'title': 'x', 'body': 'y'}), fieldset=small_fieldset)

    assert result.errors == {'title': 'Taken.'}
    form.submit.assert_not_called()


def test_process_submits_clean_values(small_fieldset):
    form = MagicMock()
    form.validate.return_value = {}

    result = FormRenderer.process(form, MultiDict({'title': 'x', 'body': 'y', 'flag': '1'}),
                                  fieldset=small_fieldset)

    assert result.submitted is True
    form.submit.assert_called_once_with({'flag': True, 'choice': None, 'title': 'x', 'body': 'y'})


def test_unknown_field_kind_rejected():
    with pytest.raises(ValueError):
        Field('x', 'slider', 'X')
