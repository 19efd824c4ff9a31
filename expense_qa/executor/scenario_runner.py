import logging
from typing import Callable, List, Optional

from playwright.sync_api import Error as PlaywrightError

from expense_qa.actions.action_handler import ActionHandler
from expense_qa.actions.control_finder import ControlFinder
from expense_qa.browser.session import BrowserSession
from expense_qa.config import SuiteConfig
from expense_qa.data import ScenarioOutcome, ScenarioResult, SoftVariancePolicy, RunStatus
from expense_qa.errors import QAError, UnsupportedBrowser
from expense_qa.executor.result_reporter import ReportHandle, ScenarioLog
from expense_qa.scenarios import Scenario, ScenarioContext, scenarios_for
from expense_qa.utils.log_icon import icon
from expense_qa.workflows.auth import AuthWorkflow
from expense_qa.workflows.expenses import ExpenseWorkflow


def default_session_factory(config: SuiteConfig) -> BrowserSession:
    return BrowserSession(browser_config=config.browser_config)


class ScenarioRunner:
    """Sequential scenario execution manager.

    Every scenario gets its own browser session and its own freshly
    generated user. A failing scenario is recorded and the run moves on.
    """

    def __init__(
        self,
        config: SuiteConfig,
        report: ReportHandle,
        session_factory: Callable[[SuiteConfig], BrowserSession] = None,
        control_finder: ControlFinder = None,
    ):
        self.config = config
        self.report = report
        self.session_factory = session_factory or default_session_factory
        self.control_finder = control_finder
        self.results: List[ScenarioResult] = []

    def system_info(self) -> dict:
        return {
            "Application": self.config.report.application,
            "Environment": self.config.report.environment,
            "Browser": self.config.browser_kind.value,
            "Tester": self.config.report.tester,
        }

    def build_context(self, session, log: ScenarioLog, notes: List[str]) -> ScenarioContext:
        actions = ActionHandler(step_log=log, control_finder=self.control_finder).initialize(session=session)
        return ScenarioContext(
            config=self.config,
            actions=actions,
            auth=AuthWorkflow(actions, self.config),
            expenses=ExpenseWorkflow(actions, self.config.interaction_mode),
            log=log,
            notes=notes,
        )

    def _settle(self, scenario: Scenario, outcome: ScenarioOutcome, log: ScenarioLog) -> RunStatus:
        """Map a scenario outcome to its final status and emit the terminal
        event."""
        if outcome == ScenarioOutcome.UNCONFIRMED:
            if self.config.soft_variance == SoftVariancePolicy.INCONCLUSIVE:
                log.inconclusive(f"{scenario.scenario_id} INCONCLUSIVE: {scenario.description}")
                return RunStatus.INCONCLUSIVE
            log.info("Expected effect not observed; counted as passed under the lenient policy")
        elif outcome == ScenarioOutcome.FEATURE_ABSENT:
            log.info("Feature not present in this build")
        log.passed(f"{scenario.scenario_id} PASSED: {scenario.description}")
        return RunStatus.PASSED

    def run_one(self, scenario: Scenario) -> ScenarioResult:
        """Run a single scenario in its own session and record the result.

        Raises:
            UnsupportedBrowser: the configured browser cannot be launched at all
        """
        result = ScenarioResult(scenario_id=scenario.scenario_id, description=scenario.description, module=scenario.module)
        result.start()
        log = self.report.create_test(scenario.scenario_id, scenario.description)
        log.info(f"Test started: {scenario.description}")
        logging.info(f"{icon['running']} Running {scenario.scenario_id}: {scenario.description}")

        try:
            with self.session_factory(self.config) as session:
                ctx = self.build_context(session, log, result.notes)
                outcome = scenario.run(ctx)
            result.complete(self._settle(scenario, outcome, log))
        except UnsupportedBrowser as e:
            log.failed(f"{scenario.scenario_id} FAILED: {e}")
            result.complete(RunStatus.FAILED, str(e))
            raise
        except (QAError, PlaywrightError) as e:
            log.failed(f"{scenario.scenario_id} FAILED: {e}")
            result.complete(RunStatus.FAILED, str(e))
        except Exception as e:
            logging.error(f"Unexpected error in {scenario.scenario_id}: {e}", exc_info=True)
            log.failed(f"{scenario.scenario_id} FAILED: Unexpected error: {e}")
            result.complete(RunStatus.FAILED, f"Unexpected error: {e}")
        finally:
            self.report.add_result(result)
            self.results.append(result)

        logging.info(f"{scenario.scenario_id} finished with status {result.status.value}")
        return result

    def run(self, scenarios: Optional[List[Scenario]] = None) -> List[ScenarioResult]:
        """Run scenarios one after another in catalogue order."""
        scenarios = scenarios if scenarios is not None else scenarios_for(self.config.modules)
        if not scenarios:
            logging.warning("No scenarios selected")
            return []
        logging.info(f"Running {len(scenarios)} scenarios on {self.config.browser_kind.value}: {self.config.base_url}")
        return [self.run_one(scenario) for scenario in scenarios]

    def execute_suite(self, scenarios: Optional[List[Scenario]] = None) -> List[ScenarioResult]:
        """Initialise the report, run everything, flush the report once.

        The report is flushed even when the run is interrupted, so a partial
        run still leaves its results on disk.
        """
        self.report.initialize(self.system_info())
        try:
            return self.run(scenarios)
        except KeyboardInterrupt:
            logging.warning("Test run interrupted - writing partial report")
            raise
        finally:
            self.report.flush()


def has_failures(results: List[ScenarioResult]) -> bool:
    return any(result.status == RunStatus.FAILED for result in results)
