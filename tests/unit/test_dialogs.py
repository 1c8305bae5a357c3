import pytest

from scripthelp_lib.dialogs import (
    ShowModalRes,
    show_action_sheet,
    show_modal,
    show_notification,
)
from scripthelp_lib.host.alert import Alert
from scripthelp_lib.host.notification import Notification

from tests.helpers import ScriptedAlert


def factory_for(alert):
    return lambda: alert


def test_action_sheet_builds_actions_and_returns_index():
    alert = ScriptedAlert(tap=1)
    index = show_action_sheet(
        {
            'title': 'Pick',
            'desc': 'one of these',
            'item_list': ['plain', {'text': 'delete', 'type': 'warn'}, {'text': 'normal one'}],
        },
        factory_for(alert),
    )
    assert index == 1
    assert alert.title == 'Pick' and alert.message == 'one of these'
    assert alert.actions == [('plain', 'normal'), ('delete', 'destructive'), ('normal one', 'normal')]
    assert alert.cancel == 'Cancel'
    assert alert.presented == 'sheet'


def test_action_sheet_cancel():
    alert = ScriptedAlert(tap=-1)
    assert show_action_sheet({'item_list': ['a'], 'cancel_text': 'Nope'}, factory_for(alert)) == -1
    assert alert.cancel == 'Nope'
    assert alert.title is None


def test_modal_confirm_collects_texts():
    alert = ScriptedAlert(tap=0, texts=['bob', 'hunter2'])
    res = show_modal(
        {
            'title': 'Login',
            'content': 'Enter credentials',
            'input_items': [{'placeholder': 'user'}, {'type': 'password', 'placeholder': 'pass', 'text': 'x'}],
        },
        factory_for(alert),
    )
    assert res == ShowModalRes(confirm=True, cancel=False, texts=['bob', 'hunter2'])
    assert alert.fields == [('user', '', False), ('pass', 'x', True)]
    assert alert.actions == [('OK', 'normal')]
    assert alert.cancel == 'Cancel'
    assert alert.presented == 'alert'


def test_modal_cancel():
    res = show_modal({'content': 'sure?'}, factory_for(ScriptedAlert(tap=-1)))
    assert res.cancel is True and res.confirm is False and res.texts == []


def test_modal_without_cancel_button():
    alert = ScriptedAlert(tap=0)
    show_modal({'show_cancel': False, 'confirm_text': 'Got it'}, factory_for(alert))
    assert alert.cancel is None
    assert alert.actions == [('Got it', 'normal')]


def test_notification_fields_and_extras():
    delivered = []
    show_notification(
        {'title': 'Hi', 'body': 'there', 'open_url': 'https://example.com', 'thread_identifier': 'grp'},
        lambda: Notification(deliver=delivered.append),
    )
    (n,) = delivered
    assert (n.title, n.subtitle, n.body, n.sound) == ('Hi', '', 'there', 'default')
    assert n.open_url == 'https://example.com'
    assert n.thread_identifier == 'grp'
    assert n.as_dict()['thread_identifier'] == 'grp'


def test_notification_rejects_unknown_sound():
    with pytest.raises(ValueError):
        show_notification({'title': 'x', 'sound': 'kazoo'}, lambda: Notification(deliver=lambda n: None))


def test_console_alert_sheet_and_cancel():
    answers = iter(['7', '1'])
    out = []
    alert = Alert(input_func=lambda prompt: next(answers), output_func=out.append)
    alert.title = 'Choose'
    alert.add_action('a')
    alert.add_destructive_action('b')
    alert.add_cancel_action('Cancel')
    assert alert.present_sheet() == 1
    assert 'Choose' in out and 'Invalid choice' in out

    alert = Alert(input_func=lambda prompt: 'c', output_func=out.append)
    alert.add_action('a')
    alert.add_cancel_action('Cancel')
    assert alert.present_sheet() == -1


def test_console_alert_text_fields():
    answers = iter(['alice', '0'])
    alert = Alert(
        input_func=lambda prompt: next(answers),
        secret_func=lambda prompt: '',
        output_func=lambda line: None,
    )
    alert.add_text_field('name')
    alert.add_secure_text_field('pin', '1234')
    alert.add_action('OK')
    assert alert.present_alert() == 0
    assert alert.text_field_value(0) == 'alice'
    # empty secure input keeps the default text
    assert alert.text_field_value(1) == '1234'


def test_default_delivery_logs_the_notification(caplog):
    caplog.set_level('INFO', logger='scripthelp_lib.host.notification')
    show_notification({'title': 'Rain', 'body': 'soon', 'thread_identifier': 'wx'})
    assert "'title': 'Rain'" in caplog.text
    assert "'thread_identifier': 'wx'" in caplog.text
