"""Suite configuration: YAML file, then ``.env`` / environment overrides."""

import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from expense_qa.browser.config import DEFAULT_CONFIG, resolve_browser_kind
from expense_qa.data import BrowserKind, InteractionMode, SoftVariancePolicy

MODULE_ORDER = ["registration", "login", "expense", "budget"]


class PagesConfig(BaseModel):
    home: str = "/"
    registration: str = "/register.html"
    login: str = "/login-register.html"
    tracker: str = "/expense-tracker.html"


class ReportConfig(BaseModel):
    report_dir: str = "./reports"
    application: str = "Expense Tracker"
    environment: str = "Test"
    tester: str = "SE - Web Technology Team"


class SuiteConfig(BaseModel):
    base_url: str = "http://localhost:3000"
    browser_config: Dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_CONFIG))
    pages: PagesConfig = Field(default_factory=PagesConfig)
    interaction_mode: InteractionMode = InteractionMode.FORCE
    soft_variance: SoftVariancePolicy = SoftVariancePolicy.INCONCLUSIVE
    modules: List[str] = Field(default_factory=lambda: list(MODULE_ORDER))
    report: ReportConfig = Field(default_factory=ReportConfig)
    log_level: str = "info"

    @property
    def browser_kind(self) -> BrowserKind:
        return resolve_browser_kind(self.browser_config.get("browser"))

    def url(self, path: str) -> str:
        """Absolute URL for a page path such as ``/register.html``."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))

    def with_browser(self, browser: Optional[str]) -> "SuiteConfig":
        """Copy of this config targeting another browser, validated now."""
        if not browser:
            return self
        kind = resolve_browser_kind(browser)
        return self.model_copy(update={"browser_config": {**self.browser_config, "browser": kind.value}})


def find_config_file(args_config=None):
    """Find the configuration file: explicit path first, then the default
    locations."""
    if args_config:
        if os.path.isfile(args_config):
            logging.info(f"Using specified config file: {args_config}")
            return args_config
        raise FileNotFoundError(f"Specified config file not found: {args_config}")

    current_dir = os.getcwd()
    project_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    default_paths = [
        os.path.join(current_dir, "config", "config.yaml"),
        os.path.join(project_dir, "config", "config.yaml"),
        os.path.join(current_dir, "config.yaml"),
    ]
    for path in default_paths:
        if os.path.isfile(path):
            logging.info(f"Auto-discovered config file: {path}")
            return path
    return None


def load_yaml(path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def build_suite_config(cfg: Dict[str, Any] = None, **overrides) -> SuiteConfig:
    """Merge defaults, the parsed YAML document, environment variables and
    explicit overrides (highest priority).

    Args:
        cfg: parsed YAML document (may be None)
        overrides: ``base_url``, ``browser``, ``headless``, ``modules``

    Returns:
        SuiteConfig
    """
    load_dotenv()
    cfg = cfg or {}
    execution = cfg.get("execution", {})

    browser_config = {**DEFAULT_CONFIG, **cfg.get("browser_config", {})}
    if "dialog_policy" in execution:
        browser_config["dialog_policy"] = execution["dialog_policy"]

    base_url = cfg.get("target", {}).get("base_url", SuiteConfig.model_fields["base_url"].default)

    # Environment variables take priority over the config file
    if os.getenv("EXPENSE_QA_BASE_URL"):
        base_url = os.getenv("EXPENSE_QA_BASE_URL")
    if os.getenv("EXPENSE_QA_BROWSER"):
        browser_config["browser"] = os.getenv("EXPENSE_QA_BROWSER")
    if os.getenv("EXPENSE_QA_HEADLESS"):
        browser_config["headless"] = _env_flag(os.getenv("EXPENSE_QA_HEADLESS"))

    if overrides.get("base_url"):
        base_url = overrides["base_url"]
    if overrides.get("browser"):
        browser_config["browser"] = overrides["browser"]
    if overrides.get("headless") is not None:
        browser_config["headless"] = overrides["headless"]

    browser_config["browser"] = resolve_browser_kind(browser_config.get("browser")).value

    modules = overrides.get("modules") or execution.get("modules") or list(MODULE_ORDER)
    unknown = [m for m in modules if m not in MODULE_ORDER]
    if unknown:
        raise ValueError(f"Unknown scenario modules {unknown}. Allowed: {MODULE_ORDER}")

    suite_config = SuiteConfig(
        base_url=base_url,
        browser_config=browser_config,
        pages=PagesConfig(**cfg.get("pages", {})),
        interaction_mode=execution.get("interaction_mode", InteractionMode.FORCE),
        soft_variance=execution.get("soft_variance", SoftVariancePolicy.INCONCLUSIVE),
        modules=[m for m in MODULE_ORDER if m in modules],
        report=ReportConfig(**cfg.get("report", {})),
        log_level=cfg.get("log", {}).get("level", "info"),
    )
    logging.debug(f"Suite configuration: {suite_config.model_dump(mode='json')}")
    return suite_config
