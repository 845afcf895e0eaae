"""Main CLI entry point using Typer."""

import logging
import sys
from typing import List, Optional

import typer
from rich.console import Console

from ..cleanup.audit import AuditStorage
from ..cleanup.cleaner import SubscriptionCleaner
from ..cleanup.reporter import SweepReporter
from ..cleanup.safety import ExemptionMatcher
from ..cloud.client import AzureResourceClient, authenticate
from ..cloud.environments import CloudEnvironment
from ..errors import FatalError, SweepAbortedError
from ..utils.logging import setup_logging
from .config import Config

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="ttlsweep",
    help="Azure subscription sweeper - delete expired resources and empty resource groups",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[Config] = None


@app.callback()
def main(
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Config file path (default: ~/.ttlsweep/config.yaml or $TTLSWEEP_CONFIG)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress log output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Azure subscription sweeper."""
    global config

    config = Config.load(config_path)

    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as package_version

    from .. import __version__

    console.print(f"ttlsweep version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    try:
        console.print(f"azure-mgmt-resource {package_version('azure-mgmt-resource')}")
    except PackageNotFoundError:
        console.print("azure-mgmt-resource not installed", style="yellow")


@app.command()
def run(
    subscription_id: str = typer.Argument(..., help="Azure subscription ID"),
    subscription_name: str = typer.Argument(..., help="Expected subscription display name"),
    ttl: int = typer.Argument(..., min=0, help="Delete resources created more than TTL days ago"),
    client_id: str = typer.Argument(..., help="Service principal client ID"),
    client_secret: str = typer.Argument(..., help="Service principal client secret"),
    tenant_id: str = typer.Argument(..., help="Azure AD tenant ID"),
    environment: Optional[str] = typer.Argument(
        None, help="Azure cloud: china, usa, german (anything else uses the global cloud)"
    ),
    exempt_prefix: Optional[List[str]] = typer.Option(
        None, "--exempt-prefix", "-e", help="Resource ID prefix to never delete (repeatable)"
    ),
    audit_dir: Optional[str] = typer.Option(None, "--audit-dir", help="Write a YAML audit log to this directory"),
    ignore_group_failures: bool = typer.Option(
        False, "--ignore-group-failures", help="Exit 0 even if empty resource groups failed to delete"
    ),
):
    """Delete resources older than TTL days, then delete empty resource groups.

    Exits 0 when every eligible deletion succeeded, 1 when some failed, and 2
    when the run was aborted (bad credentials, subscription mismatch, listing
    failure after some deletions). An aborted sweep still prints its summary.

    Examples:
        ttlsweep run 00000000-0000-0000-0000-000000000000 "Dev Sub" 7 \\
            <client-id> <client-secret> <tenant-id> china
    """
    if exempt_prefix:
        config.add_prefixes(exempt_prefix)
    audit_location = audit_dir or config.audit_dir
    include_groups = config.fail_on_group_errors and not ignore_group_failures

    try:
        cloud = CloudEnvironment.resolve(environment or config.environment)

        console.print(f"🔐 Authenticating against Azure ({cloud.key})...")
        credential = authenticate(client_id, client_secret, tenant_id, cloud)
        client = AzureResourceClient(credential, subscription_id, cloud)

        console.print(f"🔍 Sweeping subscription [bold]{subscription_name}[/bold] ({subscription_id}), TTL {ttl} day(s)")
        if config.exempt_prefixes:
            console.print(f"   Exempt prefixes: {len(config.exempt_prefixes)}")

        reporter = SweepReporter(console)
        cleaner = SubscriptionCleaner(
            client=client,
            matcher=ExemptionMatcher(config.exempt_prefixes),
            observer=reporter.display_record,
        )
        operation = cleaner.run(subscription_name, ttl)

        reporter.display_summary(operation)
        _write_audit(audit_location, operation, cleaner.records)

    except SweepAbortedError as e:
        console.print(f"✗ {e}", style="bold red")
        logger.debug("Sweep aborted", exc_info=e.cause)
        reporter.display_summary(e.operation)
        _write_audit(audit_location, e.operation, cleaner.records)
        raise typer.Exit(code=2)
    except FatalError as e:
        console.print(f"✗ {e}", style="bold red")
        raise typer.Exit(code=2)
    except Exception as e:
        console.print(f"✗ Error during cleanup: {e}", style="bold red")
        logger.exception("Error in run command")
        raise typer.Exit(code=2)

    exit_code = operation.exit_code(include_groups=include_groups)
    if exit_code:
        console.print("✗ Some deletions failed", style="bold red")
    else:
        console.print("✓ Cleanup finished", style="green")
    raise typer.Exit(code=exit_code)


def _write_audit(audit_location: Optional[str], operation, records) -> None:
    if not audit_location:
        return
    audit_file = AuditStorage(audit_location).log_operation(operation, records)
    console.print(f"📝 Audit log written to {audit_file}")


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
