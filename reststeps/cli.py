"""
Scenario runner

Usage:
  reststeps run scenarios/login.yaml
  reststeps run login --dir scenarios --var user=admin --endpoint https://api.example.com

Exit codes: 0 all steps passed, 1 a check failed, 2 a step errored or the
run could not be set up.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from loguru import logger

from reststeps.application.executor.handler_registry import HandlerRegistry
from reststeps.application.executor.step_executor import ExecutionResult, StepExecutor
from reststeps.application.outcome import FAILED
from reststeps.application.ports.requests_client import RequestsHttpClient
from reststeps.application.services.execution_deps import ExecutionDeps
from reststeps.domain.exceptions import ConfigurationError, StepError
from reststeps.domain.paths import stringify
from reststeps.domain.run import RunContext
from reststeps.domain.scenario import Scenario
from reststeps.infrastructure.config import Settings
from reststeps.infrastructure.document import JsonPathNgEvaluator, LxmlXPathEvaluator
from reststeps.infrastructure.logging.log_setup import setup_console_logging
from reststeps.infrastructure.logging.loguru_logger import LoguruLogger
from reststeps.infrastructure.scenario import ScenarioFileFinder, ScenarioLoaderRegistry
from reststeps.infrastructure.url.base_url_resolver import EndpointResolver

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="reststeps", description="Run declarative REST scenarios")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="run a scenario file or scenario id")
    run.add_argument("scenario", help="path to a .yaml/.yml/.json file, or a scenario id")
    run.add_argument("--dir", default="scenarios", help="directory searched when a scenario id is given")
    run.add_argument("--var", action="append", default=[], metavar="KEY=VALUE", help="set a run variable")
    run.add_argument("--endpoint", default=None, help="service endpoint for this run")
    run.add_argument("--env-file", default=None, help="dotenv file with RESTSTEPS_* settings")
    run.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return parser


def parse_vars(pairs: Sequence[str]) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"--var expects KEY=VALUE, got {pair!r}")
        result[key.strip()] = value
    return result


def locate_scenario(target: str, base_dir: Path) -> Path:
    path = Path(target)
    if path.is_file():
        return path
    found = ScenarioFileFinder(base_dir).find_by_id(target)
    if found is None:
        raise ConfigurationError(f"Scenario not found: {target} (searched {base_dir})")
    return found


def run_scenario(
    scenario: Scenario,
    settings: Settings,
    variables: Optional[Dict[str, str]] = None,
    endpoint: Optional[str] = None,
    http_client=None,
) -> ExecutionResult:
    default_headers = {k: stringify(v) for k, v in scenario.defaults.headers.items()}
    deps = ExecutionDeps(
        http_client=http_client or RequestsHttpClient(base_headers=default_headers, timeout_sec=settings.timeout_sec),
        json_path=JsonPathNgEvaluator(),
        xpath=LxmlXPathEvaluator(),
        url_resolver=EndpointResolver(),
        logger=LoguruLogger().bind(scenario_id=scenario.meta.id),
        base_url=settings.base_url,
    )
    ctx = RunContext(
        vars={**scenario.defaults.vars, **(variables or {})},
        endpoint=endpoint or scenario.defaults.endpoint or settings.endpoint,
    )
    return StepExecutor(HandlerRegistry.default()).execute(scenario.steps, ctx, deps)


def _run(args: argparse.Namespace) -> int:
    settings = Settings.from_env(env_file=args.env_file)
    setup_console_logging(args.log_level or settings.log_level)

    path = locate_scenario(args.scenario, Path(args.dir))
    scenario = ScenarioLoaderRegistry().load(path)
    logger.info("Scenario {} ({} steps) from {}", scenario.meta.name, len(scenario.steps), path)

    result = run_scenario(scenario, settings, parse_vars(args.var), args.endpoint)
    if result.ok:
        logger.info("Scenario {} passed ({} steps)", scenario.meta.id, result.executed)
        return EXIT_OK

    logger.error("Scenario {} stopped at step {}: {}", scenario.meta.id, result.failed_step_id, result.error_message)
    return EXIT_FAILED if result.error_kind == FAILED else EXIT_ERROR


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return _run(args)
    except StepError as e:
        logger.error("{}: {}", type(e).__name__, e)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
