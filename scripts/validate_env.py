#!/usr/bin/env python3
"""geotargeting pre-flight environment validation.

Checks:
  1. Python version compatibility (3.10+)
  2. Required package imports
  3. geotargeting module imports
  4. Configuration (environment overrides and TargetingConfig validation)
  5. Logging configuration file
  6. Nominatim connectivity (skippable)

Usage:
    python scripts/validate_env.py
    python scripts/validate_env.py --skip-network
"""

from __future__ import annotations

import argparse
import importlib
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

# Ensure project root is on sys.path
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

# (ok, message); ok=None marks a warning that does not fail the run
CheckResult = Tuple[Optional[bool], str]

_GREEN = "\033[32m"
_RED = "\033[31m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"
_BOLD = "\033[1m"

_ENV_OVERRIDES = (
    "NOMINATIM_BASE_URL",
    "NOMINATIM_USER_AGENT",
    "GEOCODE_COUNTRY_CODES",
    "GEOCODE_LANGUAGE",
    "GEOCODE_CACHE_CAPACITY",
    "GEOCODE_CACHE_TTL_SECONDS",
    "LOG_LEVEL",
)


def _ok(msg: str) -> str:
    return f"{_GREEN}✓{_RESET}  {msg}"


def _fail(msg: str) -> str:
    return f"{_RED}✗{_RESET}  {msg}"


def _warn(msg: str) -> str:
    return f"{_YELLOW}⚠{_RESET}  {msg}"


def _header(msg: str) -> str:
    return f"\n{_BOLD}{msg}{_RESET}"


# ── Check functions ──────────────────────────────────────────────────────────────

def check_python_version() -> CheckResult:
    """Verify Python version is 3.10 or newer."""
    major, minor = sys.version_info[:2]
    version_str = f"{major}.{minor}.{sys.version_info.micro}"
    if (major, minor) < (3, 10):
        return False, f"Python {version_str} detected; requires >= 3.10"
    return True, f"Python {version_str}"


def check_package_imports() -> List[CheckResult]:
    """Verify the runtime and test packages can be imported."""
    packages = [
        ("requests", "requests", True),
        ("dotenv", "python-dotenv", True),
        ("yaml", "PyYAML", True),
        ("pytest", "pytest", False),
    ]
    results: List[CheckResult] = []
    for import_name, package_name, required in packages:
        try:
            mod = importlib.import_module(import_name)
        except ImportError:
            if required:
                results.append((False, f"{package_name}: NOT installed (pip install {package_name})"))
            else:
                results.append((None, f"{package_name}: not installed (test extra)"))
            continue
        results.append((True, f"{package_name} ({getattr(mod, '__version__', '?')})"))
    return results


def check_module_imports() -> List[CheckResult]:
    """Verify the geotargeting modules import cleanly."""
    modules = [
        "config.defaults",
        "config.settings",
        "geotargeting.models",
        "geotargeting.analysis",
        "geotargeting.clients.nominatim_client",
        "geotargeting.io",
        "geotargeting.geocode_gateway",
        "geotargeting.planner",
    ]
    results: List[CheckResult] = []
    for module in modules:
        try:
            importlib.import_module(module)
            results.append((True, module))
        except ImportError as exc:
            results.append((False, f"{module}: {exc}"))
    return results


def check_configuration() -> List[CheckResult]:
    """Report environment overrides and validate the resulting TargetingConfig."""
    from config.settings import TargetingConfig  # loads .env

    results: List[CheckResult] = []
    for name in _ENV_OVERRIDES:
        value = os.getenv(name)
        if value is None:
            results.append((True, f"{name}: not set (default)"))
        else:
            results.append((True, f"{name} = {value!r}"))

    try:
        config = TargetingConfig()
    except ValueError as exc:
        results.append((False, f"TargetingConfig rejected the environment: {exc}"))
        return results

    if config.user_agent.startswith("geotargeting/"):
        results.append((
            None,
            "NOMINATIM_USER_AGENT is the package default; the public Nominatim "
            "policy asks for an application-specific value",
        ))
    return results


def check_logging_config() -> CheckResult:
    path = _ROOT / "config" / "logging.yaml"
    if path.exists():
        return True, f"Logging configuration found: {path}"
    return None, f"{path} missing; configure_logging() will fall back to basicConfig"


def check_nominatim_connectivity(timeout: float = 10.0) -> CheckResult:
    """Run one forward search against the configured Nominatim server."""
    from config.settings import TargetingConfig
    from geotargeting.clients.nominatim_client import NominatimClient

    config = TargetingConfig()
    with NominatimClient(
        base_url=config.nominatim_base_url,
        user_agent=config.user_agent,
        max_retries=0,
        request_timeout=timeout,
        min_interval_seconds=0.0,
        language=config.language,
        country_codes=config.country_codes,
    ) as client:
        places = client.search("Avenida Paulista, São Paulo", limit=1)

    if places is None:
        return False, f"Nominatim unreachable at {config.nominatim_base_url}"
    return True, f"Nominatim reachable at {config.nominatim_base_url} ({len(places)} result)"


# ── Report ───────────────────────────────────────────────────────────────────────

def _print_results(results: List[CheckResult], indent: int = 2) -> int:
    """Print check results and return the count of failures."""
    failures = 0
    pad = " " * indent
    for ok, msg in results:
        if ok is True:
            print(f"{pad}{_ok(msg)}")
        elif ok is False:
            print(f"{pad}{_fail(msg)}")
            failures += 1
        else:
            print(f"{pad}{_warn(msg)}")
    return failures


def main() -> None:
    """Run all pre-flight checks and report results."""
    parser = argparse.ArgumentParser(description="geotargeting pre-flight environment validation")
    parser.add_argument(
        "--skip-network",
        action="store_true",
        default=False,
        help="Skip the Nominatim connectivity check",
    )
    args = parser.parse_args()

    total_failures = 0

    print(_header("1. Python Version"))
    total_failures += _print_results([check_python_version()])

    print(_header("2. Package Imports"))
    total_failures += _print_results(check_package_imports())

    print(_header("3. geotargeting Module Imports"))
    module_failures = _print_results(check_module_imports())
    total_failures += module_failures

    print(_header("4. Configuration"))
    if module_failures:
        print(f"  {_warn('Skipped (module imports failed)')}")
    else:
        total_failures += _print_results(check_configuration())

    print(_header("5. Logging"))
    _print_results([check_logging_config()])

    print(_header("6. Network Connectivity"))
    if args.skip_network or module_failures:
        print(f"  {_warn('Skipped')}")
    else:
        ok, msg = check_nominatim_connectivity()
        # Connectivity is a warning; lookups degrade to UNAVAILABLE without it
        print(f"  {_ok(msg) if ok else _warn(msg)}")

    print(f"\n{'═' * 54}")
    if total_failures == 0:
        print(f"{_GREEN}{_BOLD}All required checks passed.{_RESET} Environment is ready.")
        sys.exit(0)
    print(f"{_RED}{_BOLD}{total_failures} check(s) failed.{_RESET} Resolve the errors above.")
    sys.exit(1)


if __name__ == "__main__":
    main()
