import pytest

from expense_qa.actions import ActionHandler
from expense_qa.actions.action_handler import EVENT_DISPATCH_YIELD_SECONDS
from expense_qa.browser.dialogs import NO_DIALOG
from expense_qa.data import InteractionMode
from expense_qa.errors import ElementNotFound, SessionClosedError
from tests.fakes import FakePage, RecordingLog, StubDialogSource


def handler_for(page, dialogs=None, log=None):
    return ActionHandler(step_log=log, settle_seconds=0).initialize(page=page, dialogs=dialogs)


def test_probe_alert_without_dialog_is_falsy():
    actions = handler_for(FakePage(), dialogs=StubDialogSource())
    probe = actions.probe_alert()
    assert not probe
    assert probe.text == ''


def test_probe_alert_consumes_pending_dialog():
    actions = handler_for(FakePage(), dialogs=StubDialogSource('Expense added successfully!'))
    probe = actions.probe_alert()
    assert probe
    assert probe.text == 'Expense added successfully!'
    assert not actions.probe_alert()


def test_probe_alert_yields_through_wait():
    page = FakePage()
    actions = handler_for(page, dialogs=StubDialogSource())
    actions.probe_alert()
    assert page.waits == [EVENT_DISPATCH_YIELD_SECONDS * 1000]


def test_probe_alert_without_dialog_source():
    assert handler_for(FakePage()).probe_alert() is NO_DIALOG


def test_missing_element_raises_element_not_found():
    actions = handler_for(FakePage())
    with pytest.raises(ElementNotFound) as excinfo:
        actions.text_of('#total-amount')
    assert excinfo.value.selector == '#total-amount'


def test_optional_lookups_do_not_raise():
    page = FakePage({'#loginBtn': {}})
    page.counts['#expense-list tr'] = 3
    actions = handler_for(page)
    assert actions.is_present('#loginBtn')
    assert not actions.is_present('#registerBtn')
    assert actions.count('#expense-list tr') == 3


def test_unbound_handler_raises():
    with pytest.raises(SessionClosedError):
        ActionHandler().current_url()


def test_navigate_records_step():
    log = RecordingLog()
    page = FakePage()
    handler_for(page, log=log).navigate('http://app.test/login-register.html')
    assert page.visits == ['http://app.test/login-register.html']
    assert log.events == [('INFO', 'Navigated to: http://app.test/login-register.html')]


def test_force_click_scrolls_then_dispatches_synthetic_click():
    page = FakePage({'#registerBtn': {}})
    handler_for(page).click_robust('#registerBtn')
    assert [a[0] for a in page.actions] == ['js_scroll', 'js_click']


def test_real_click_uses_native_click():
    page = FakePage({'#loginBtn': {}})
    handler_for(page).click('#loginBtn')
    assert [a[0] for a in page.actions] == ['click']


def test_type_text_modes():
    page = FakePage({'#email': {}})
    actions = handler_for(page)
    actions.type_text('#email', 'a@example.com', mode=InteractionMode.FORCE)
    actions.type_text('#email', 'b@example.com', clear_before_type=True)
    assert page.actions[0][:3] == ('fill', '#email', 'a@example.com')
    assert page.actions[0][3] == {'force': True}
    assert [a[0] for a in page.actions[1:]] == ['clear', 'click', 'type']


def test_dispatch_input_events_skips_missing_fields():
    page = FakePage({'#email': {}, '#password': {}})
    fired = handler_for(page).dispatch_input_events(['email', 'password', 'missing'])
    assert fired == 2
    assert page.evaluated[0][1] == ['email', 'password', 'missing']


def test_wait_pumps_page_events():
    page = FakePage()
    actions = handler_for(page)
    actions.wait(2)
    actions.wait(0)
    assert page.waits == [2000]


def test_find_control_delegates_to_finder():
    page = FakePage({"button:has-text('Edit')": {}})
    assert handler_for(page).find_control('edit') == "button:has-text('Edit')"
    assert handler_for(page).find_control('archive') is None
