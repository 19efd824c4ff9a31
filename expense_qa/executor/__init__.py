from .result_reporter import ReportHandle, ReportLifecycleError, ReportWriter, ScenarioLog
from .scenario_runner import ScenarioRunner, default_session_factory, has_failures

__all__ = [
    "ReportHandle",
    "ReportLifecycleError",
    "ReportWriter",
    "ScenarioLog",
    "ScenarioRunner",
    "default_session_factory",
    "has_failures",
]
