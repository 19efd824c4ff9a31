import argparse
import sys
import traceback
import uuid

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from expense_qa.config import MODULE_ORDER, build_suite_config, find_config_file, load_yaml
from expense_qa.data import BrowserKind, SuiteSession
from expense_qa.errors import UnsupportedBrowser
from expense_qa.executor import ReportHandle, ReportWriter, ScenarioRunner, has_failures
from expense_qa.utils.get_log import GetLog


def check_playwright_browser(kind: BrowserKind) -> bool:
    try:
        with sync_playwright() as p:
            browser = getattr(p, kind.value).launch(headless=True)
            browser.close()
        print(f"✅ Playwright {kind.value} available")
        return True
    except PlaywrightError as e:
        print(f"⚠️ Playwright {kind.value} unavailable: {e}")
        return False


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Expense Tracker E2E Test Entry Point")
    parser.add_argument("--config", "-c", help="YAML configuration file path (optional, default auto-search config/config.yaml)")
    parser.add_argument("--browser", "-b", help="Target browser: chromium (chrome) or firefox")
    parser.add_argument("--base-url", help="Application base URL, e.g. http://localhost:3000")
    parser.add_argument(
        "--module",
        "-m",
        action="append",
        choices=MODULE_ORDER,
        help="Scenario module to run (repeatable, default all)",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    return parser.parse_args(argv)


def run_tests(suite_config) -> int:
    print(f"🎯 Target: {suite_config.base_url}")
    print(f"📋 Modules: {', '.join(suite_config.modules)}")

    print("🔍 Checking Playwright browsers...")
    if not check_playwright_browser(suite_config.browser_kind):
        print("Please manually run: `playwright install` to install browser binaries, then retry.", file=sys.stderr)
        return 1

    GetLog.get_log(level=suite_config.log_level)
    suite = SuiteSession(
        session_id=str(uuid.uuid4()),
        base_url=suite_config.base_url,
        browser=suite_config.browser_kind.value,
    )
    report = ReportHandle(suite, writer=ReportWriter(base_dir=suite_config.report.report_dir))
    runner = ScenarioRunner(suite_config, report)

    try:
        results = runner.execute_suite()
    except UnsupportedBrowser as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    except Exception:
        print("Test execution failed, stack trace:", file=sys.stderr)
        traceback.print_exc()
        return 1

    stats = suite.get_summary_stats()
    print(f"🔢 Total scenarios: {stats['total']}")
    print(f"✅ Passed: {stats['passed']}")
    print(f"❌ Failed: {stats['failed']}")
    print(f"❔ Inconclusive: {stats['inconclusive']}")
    print("HTML report path: ", report.html_path)
    return 1 if has_failures(results) else 0


def main(argv=None):
    args = parse_args(argv)

    try:
        config_path = find_config_file(args.config)
        cfg = load_yaml(config_path) if config_path else {}
        suite_config = build_suite_config(
            cfg,
            base_url=args.base_url,
            browser=args.browser,
            headless=False if args.headed else None,
            modules=args.module,
        )
    except (FileNotFoundError, ValueError, UnsupportedBrowser) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(run_tests(suite_config))
