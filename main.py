#!/usr/bin/env python3
"""PowerSchool Student Sync - Entry point."""
import sys
import os
import json
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import click
import requests
from colorama import Fore, Style, init

from config import app_config
from src.api.powerschool_client import PowerSchoolClient
from src.api.student_service import StudentService
from src.builder.payload_builder import StudentPayloadBuilder
from src.exporter.json_exporter import JsonExporter
from src.validator.data_validator import InvalidArgument

# Initialize colorama
init(autoreset=True)


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}PowerSchool Student Sync{Fore.CYAN}             ║")
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    click.echo()


def load_request(path: str) -> dict:
    """Load a {students: [...]} request from a JSON file."""
    with open(path) as f:
        return json.load(f)


def echo_result(result) -> None:
    """Print an API result and exit non-zero on errorMessage."""
    click.echo(json.dumps(result, indent=2, default=str))
    if isinstance(result, dict) and "errorMessage" in result:
        click.echo(f"{Fore.RED}❌ PowerSchool rejected the request")
        sys.exit(1)
    click.echo(f"{Fore.GREEN}✅ Done")


def run_action(action: str, request_file: str) -> None:
    """Send the request file to PowerSchool."""
    service = StudentService(PowerSchoolClient(app_config.powerschool_api))
    try:
        params = load_request(request_file)
        if action == "INSERT":
            result = service.create_students(params)
        else:
            result = service.update_students(params)
    except (InvalidArgument, json.JSONDecodeError) as e:
        click.echo(f"{Fore.RED}❌ {e}")
        sys.exit(1)
    except requests.RequestException as e:
        click.echo(f"{Fore.RED}❌ Could not reach PowerSchool: {e}")
        sys.exit(1)
    echo_result(result)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """PowerSchool Student Sync - Create and update students in PowerSchool."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("request_file", type=click.Path(exists=True))
def create(request_file):
    """Create the students of REQUEST_FILE."""
    print_banner()
    click.echo(f"{Fore.YELLOW}Creating students from {request_file}...")
    run_action("INSERT", request_file)


@cli.command()
@click.argument("request_file", type=click.Path(exists=True))
def update(request_file):
    """Update the students of REQUEST_FILE."""
    print_banner()
    click.echo(f"{Fore.YELLOW}Updating students from {request_file}...")
    run_action("UPDATE", request_file)


@cli.command()
@click.argument("request_file", type=click.Path(exists=True))
@click.option(
    "--action",
    type=click.Choice(["INSERT", "UPDATE"]),
    default="INSERT",
    show_default=True,
    help="Bulk endpoint action",
)
@click.option(
    "--output",
    type=click.Path(),
    help="Write the request body to this file instead of printing it",
)
def preview(request_file, action, output):
    """Build the request body for REQUEST_FILE without sending it."""
    builder = StudentPayloadBuilder()
    try:
        students = builder.build_batch(action, load_request(request_file))
    except (InvalidArgument, json.JSONDecodeError) as e:
        click.echo(f"{Fore.RED}❌ {e}")
        sys.exit(1)

    body = StudentService.build_request_body(students)
    if output:
        JsonExporter().export(Path(output), body)
        click.echo(f"{Fore.GREEN}✅ {len(students)} student(s) written to {output}")
    else:
        click.echo(json.dumps(body, indent=2, default=str))


if __name__ == "__main__":
    cli()
