"""
命令行入口
"""
from typing import Optional

import typer

from .models import MonitorConfig
from .monitor import CertificateExpiryMonitor
from .services.config_validator import ConfigValidator
from .services.error_handler import ConfigurationError, ExtractionError, TimeResolutionError

EXIT_FAILURE = 1
EXIT_USAGE = 2

app = typer.Typer(add_completion=False)


@app.command()
def check(
    archive_path: str = typer.Argument(..., metavar="ARCHIVE", help="Password-protected PKCS#12 archive"),
    passphrase: str = typer.Argument(..., metavar="PASSPHRASE", help="Archive passphrase"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Suppress the message for a healthy certificate"),
    debug: bool = typer.Option(False, "-d", "--debug", help="Print intermediate timestamps and day counts"),
    sns_topic_arn: Optional[str] = typer.Option(
        None,
        "--sns-topic-arn",
        help="Publish alerts to this SNS topic",
        envvar="SNS_TOPIC_ARN",
    ),
    timezone_name: Optional[str] = typer.Option(
        None,
        "--timezone",
        help="IANA time zone for calendar days (default: host local time)",
        envvar="CERT_TIMEZONE",
    ),
    warning_days: int = typer.Option(14, "--warning-days", help="Days before expiry that count as soon"),
):
    """Check when the certificate in ARCHIVE expires."""
    config = MonitorConfig(
        archive_path=archive_path,
        passphrase=passphrase,
        quiet=quiet,
        debug=debug,
        sns_topic_arn=sns_topic_arn,
        timezone_name=timezone_name,
        warning_days=warning_days,
    )

    try:
        ConfigValidator().ensure_valid(config)
    except ConfigurationError as e:
        for error in e.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=EXIT_USAGE)

    try:
        monitor = CertificateExpiryMonitor(config)
        result = monitor.execute()
    except ExtractionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=EXIT_FAILURE)
    except TimeResolutionError as e:
        typer.echo(f"Error: cannot resolve local time: {e}", err=True)
        raise typer.Exit(code=EXIT_FAILURE)

    if config.debug:
        for line in monitor.debug_lines(result):
            typer.echo(line)

    if result.message is not None:
        typer.echo(result.message)


def main():
    app()
