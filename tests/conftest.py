import uuid

import pytest

from expense_qa.config import build_suite_config
from expense_qa.data import SuiteSession
from expense_qa.executor import ReportHandle, ReportWriter


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        '--browser',
        action='store',
        default=None,
        help='Browser for live tests: chromium (chrome) or firefox',
    )
    parser.addoption(
        '--base-url',
        action='store',
        default=None,
        help='Expense Tracker base URL for live tests (overrides config and env)',
    )
    parser.addoption(
        '--run-e2e',
        action='store_true',
        default=False,
        help='Run live browser tests against a running application',
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line('markers', 'e2e: drives a real browser against a running application')


def pytest_collection_modifyitems(config: pytest.Config, items) -> None:
    if config.getoption('--run-e2e'):
        return
    skip_e2e = pytest.mark.skip(reason='live browser test, pass --run-e2e to run')
    for item in items:
        if 'e2e' in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture(autouse=True)
def isolated_env(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep developer shells and .env files out of unit tests
    if request.node.get_closest_marker('e2e'):
        return
    for name in ('EXPENSE_QA_BASE_URL', 'EXPENSE_QA_BROWSER', 'EXPENSE_QA_HEADLESS'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr('expense_qa.config.load_dotenv', lambda *args, **kwargs: False)


@pytest.fixture
def suite_config():
    return build_suite_config({'target': {'base_url': 'http://app.test'}})


@pytest.fixture
def report_handle(tmp_path) -> ReportHandle:
    suite = SuiteSession(session_id=str(uuid.uuid4()), base_url='http://app.test')
    handle = ReportHandle(suite, writer=ReportWriter(base_dir=str(tmp_path)))
    return handle.initialize({'Application': 'Expense Tracker', 'Browser': 'chromium'})
