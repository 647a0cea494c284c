"""Validation logic for mkautonav."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from shutil import which

from rich import box
from rich.console import Console
from rich.table import Table

from mkautonav.generator import load_site_config
from mkautonav.models import AutoNavError, SiteConfig

# Initialize Rich console for local output
console = Console()


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes:
        check_name: Name of the validation check
        passed: Whether the check passed
        message: Status message or error details
        value: Optional value (e.g., version string)
        required: Whether this check is required for operation
    """

    check_name: str
    passed: bool
    message: str
    value: str | None = None
    required: bool = True


def check_git() -> ValidationResult:
    """Check if git is installed.

    Git is optional: without it documents are ordered by local file times.

    Returns:
        Validation result.
    """
    path = which("git")
    if not path:
        return ValidationResult(
            check_name="Git", passed=False, message="Not found - falling back to file times", required=False
        )

    try:
        result = subprocess.run([path, "--version"], capture_output=True, text=True, check=True, timeout=5)
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired):
        return ValidationResult(
            check_name="Git", passed=False, message="Found but version check failed", required=False
        )
    version = result.stdout.strip().removeprefix("git version ")
    return ValidationResult(check_name="Git", passed=True, message="Installed", value=version, required=False)


class SiteValidator:
    """Validates a site configuration file and the paths it references."""

    config_path: Path

    def __init__(self, config_path: Path):
        """Initialize validator with the site configuration path.

        Args:
            config_path: Path to site configuration file
        """
        self.config_path = config_path
        self.site: SiteConfig | None = None

    def check_config(self) -> ValidationResult:
        """Check that the site configuration loads and validates.

        Returns:
            Validation result
        """
        try:
            self.site = load_site_config(self.config_path)
        except (FileNotFoundError, AutoNavError) as e:
            return ValidationResult(check_name="Site config", passed=False, message=str(e), required=True)

        return ValidationResult(
            check_name="Site config", passed=True, message="Valid", value=self.config_path.name, required=True
        )

    def check_src_dir(self) -> ValidationResult:
        """Check that the documentation source directory exists.

        Returns:
            Validation result
        """
        if self.site is None:
            return ValidationResult(check_name="Source dir", passed=False, message="No valid configuration")
        if not self.site.src_dir.is_dir():
            return ValidationResult(
                check_name="Source dir", passed=False, message=f"Not a directory: {self.site.src_dir}", required=True
            )
        return ValidationResult(check_name="Source dir", passed=True, message="Found", value=str(self.site.src_dir))

    def check_summary_target(self) -> ValidationResult | None:
        """Check the outline file when summary mode is configured.

        Returns:
            Validation result, or None when summary mode is off
        """
        if self.site is None or self.site.auto_nav is None or self.site.auto_nav.summary is None:
            return None

        target = self.site.auto_nav.summary.target
        if not target.is_absolute():
            target = self.config_path.parent / target
        if not target.is_file():
            return ValidationResult(check_name="Summary file", passed=False, message=f"Not found: {target}")
        return ValidationResult(check_name="Summary file", passed=True, message="Found", value=target.name)


def _status(result: ValidationResult) -> str:
    if result.passed:
        return "[green]:white_check_mark:[/green]"
    return "[red]:x:[/red]" if result.required else "[yellow]:warning:[/yellow]"


def _details(result: ValidationResult) -> str:
    details = result.message if result.value is None else f"{result.message} ({result.value})"
    return details if result.required else f"{details} [dim](optional)[/dim]"


def display_validation_results(results: list[ValidationResult], title: str = "Site Validation") -> None:
    """Display validation results as a table with a pass/fail caption.

    Args:
        results: List of validation results
        title: Table title
    """
    table = Table(title=f":compass: {title}", box=box.SIMPLE_HEAD, title_style="bold cyan")
    table.add_column("Check", style="cyan", no_wrap=True)
    table.add_column("Status", justify="center", no_wrap=True)
    table.add_column("Details", overflow="fold")

    for result in results:
        table.add_row(result.check_name, _status(result), _details(result))

    failed = [r.check_name for r in results if r.required and not r.passed]
    table.caption = f"[red]Failed: {', '.join(failed)}[/red]" if failed else "[green]All required checks passed[/green]"
    console.print(table)


def validate_environment(config_path: Path) -> tuple[bool, list[ValidationResult]]:
    """Validate system and site requirements.

    Args:
        config_path: Path to site configuration file

    Returns:
        Tuple of (all_required_passed, list of results)
    """
    results: list[ValidationResult] = [check_git()]

    site_validator = SiteValidator(config_path)
    config_result = site_validator.check_config()
    results.append(config_result)

    # Path checks need a loaded configuration
    if config_result.passed:
        if (summary_result := site_validator.check_summary_target()) is not None:
            results.append(summary_result)
        else:
            results.append(site_validator.check_src_dir())

    all_required_passed = all(r.passed or not r.required for r in results)
    return all_required_passed, results
