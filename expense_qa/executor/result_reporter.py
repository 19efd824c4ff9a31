import json
import logging
import os
import platform
import threading
from datetime import datetime
from typing import Dict, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from expense_qa.data import ScenarioResult, StepEvent, StepStatus, SuiteSession
from expense_qa.utils.log_icon import icon

STATUS_ICONS = {
    StepStatus.INFO: icon["info"],
    StepStatus.PASS: icon["check"],
    StepStatus.FAIL: icon["cross"],
    StepStatus.WARNING: icon["warning"],
    StepStatus.INCONCLUSIVE: icon["question"],
}


class ReportLifecycleError(RuntimeError):
    pass


class ScenarioLog:
    """Step-event writer bound to one scenario."""

    def __init__(self, handle: "ReportHandle", scenario_id: str):
        self.handle = handle
        self.scenario_id = scenario_id

    def log(self, status: StepStatus, message: str) -> StepEvent:
        event = StepEvent(scenario_id=self.scenario_id, status=status, message=message)
        self.handle.append(event)
        level = logging.ERROR if status == StepStatus.FAIL else logging.INFO
        logging.log(level, f"{STATUS_ICONS[status]} [{self.scenario_id}] {message}")
        return event

    def info(self, message: str) -> StepEvent:
        return self.log(StepStatus.INFO, message)

    def passed(self, message: str) -> StepEvent:
        return self.log(StepStatus.PASS, message)

    def failed(self, message: str) -> StepEvent:
        return self.log(StepStatus.FAIL, message)

    def warning(self, message: str) -> StepEvent:
        return self.log(StepStatus.WARNING, message)

    def inconclusive(self, message: str) -> StepEvent:
        return self.log(StepStatus.INCONCLUSIVE, message)


class ReportHandle:
    """Run-wide report sink with an explicit lifecycle.

    Initialised once before any scenario runs, appended to while they run,
    flushed exactly once afterwards. Appends are serialised with a lock so the
    handle can be shared by concurrent scenarios.
    """

    def __init__(self, suite: SuiteSession, writer: "ReportWriter" = None):
        self.suite = suite
        self.writer = writer or ReportWriter()
        self._lock = threading.Lock()
        self._initialized = False
        self._flushed = False
        self.json_path = ""
        self.html_path = ""

    @property
    def is_flushed(self) -> bool:
        return self._flushed

    def initialize(self, system_info: Dict[str, str]) -> "ReportHandle":
        with self._lock:
            if self._initialized:
                raise ReportLifecycleError("Report already initialized")
            self.suite.system_info = {**system_info, "OS": system_info.get("OS") or platform.system()}
            self.suite.start_session()
            self._initialized = True
        logging.debug(f"Report initialized for session {self.suite.session_id}: {self.suite.system_info}")
        return self

    def _check_open(self):
        if not self._initialized:
            raise ReportLifecycleError("Report not initialized")
        if self._flushed:
            raise ReportLifecycleError("Report already flushed")

    def create_test(self, scenario_id: str, description: str = "") -> ScenarioLog:
        with self._lock:
            self._check_open()
        return ScenarioLog(self, scenario_id)

    def append(self, event: StepEvent):
        with self._lock:
            self._check_open()
            self.suite.events.append(event)

    def add_result(self, result: ScenarioResult):
        with self._lock:
            self._check_open()
            self.suite.results.append(result)

    def flush(self, report_dir: Optional[str] = None) -> Tuple[str, str]:
        """Write JSON and HTML reports. Only the first call writes.

        Returns:
            tuple: (json report path, html report path)
        """
        with self._lock:
            if self._flushed:
                return self.json_path, self.html_path
            self._check_open()
            self.suite.complete_session()
            self._flushed = True

        report_dir = report_dir or self.writer.default_report_dir()
        self.json_path = self.writer.generate_json_report(self.suite, report_dir)
        self.html_path = self.writer.generate_html_report(self.suite, report_dir)
        logging.info(f"Test report generated successfully: {self.html_path}")
        return self.json_path, self.html_path


class ReportWriter:
    """Renders a SuiteSession to disk."""

    def __init__(self, template_dir: str = None, template_name: str = "report.html.j2", base_dir: str = "./reports"):
        self.template_dir = template_dir or os.path.join(os.path.dirname(__file__), "../static")
        self.template_name = template_name
        self.base_dir = base_dir

    def default_report_dir(self) -> str:
        timestamp = os.getenv("EXPENSE_QA_TIMESTAMP") or datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        return os.path.join(self.base_dir, f"test_{timestamp}")

    def generate_json_report(self, suite: SuiteSession, report_dir: str) -> str:
        os.makedirs(report_dir, exist_ok=True)
        json_path = os.path.join(report_dir, "test_results.json")
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(suite.to_dict(), f, indent=2, ensure_ascii=False, default=str)
        absolute_path = os.path.abspath(json_path)
        logging.debug(f"JSON report generated: {absolute_path}")
        return absolute_path

    def generate_html_report(self, suite: SuiteSession, report_dir: str) -> str:
        env = Environment(loader=FileSystemLoader(self.template_dir), autoescape=select_autoescape(["html", "j2"]))
        template = env.get_template(self.template_name)
        scenarios = [{"result": result, "events": suite.events_for(result.scenario_id)} for result in suite.results]
        html_out = template.render(
            title=f"{suite.system_info.get('Application', 'Expense Tracker')} Test Report",
            suite=suite,
            summary=suite.get_summary_stats(),
            scenarios=scenarios,
        )
        os.makedirs(report_dir, exist_ok=True)
        html_path = os.path.join(report_dir, "test_report.html")
        with open(html_path, "w", encoding="utf-8") as f:
            f.write(html_out)
        absolute_path = os.path.abspath(html_path)
        logging.debug(f"HTML report generated: {absolute_path}")
        return absolute_path
