"""CLI entry point for standalone usage: depadvice.

Subcommands:
    depadvice create-facts -o facts.json           # Generate a fact snapshot template
    depadvice compute facts.json [-c config.json]  # Compute advice, print JSON
"""

from __future__ import annotations

import json
import sys
from dataclasses import replace

import click
import structlog

from depadvice.config.settings import AdviceConfig
from depadvice.core.logging import setup_logging
from depadvice.engines.advice import Advisor
from depadvice.exceptions import AdviceError
from depadvice.schemas.facts import load_facts

log = structlog.get_logger("depadvice.cli")

_FACTS_TEMPLATE: dict = {
    "used_variant_dependencies": [
        {
            "dependency": {
                "identifier": "com.squareup.okhttp3:okhttp",
                "version": "4.9.0",
                "configuration": "implementation",
            },
            "variants": ["main"],
        }
    ],
    "all_components": [
        {
            "dependency": {
                "identifier": "com.squareup.okhttp3:okhttp",
                "version": "4.9.0",
                "configuration": "implementation",
            },
            "is_compile_only_annotations": False,
            "is_security_provider": False,
        }
    ],
    "all_components_with_transitives": [],
    "unused_components_with_transitives": [],
    "used_transitive_components": [],
    "abi_deps": [],
    "all_declared_deps": [
        {
            "identifier": "com.squareup.okhttp3:okhttp",
            "version": "4.9.0",
            "configuration": "implementation",
        }
    ],
    "unused_procs": [],
    "service_loaders": [],
    "facade_groups": [],
}


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """depadvice: compute dependency advice from usage facts."""
    setup_logging("DEBUG" if verbose else None)


@main.command("create-facts")
@click.option("-o", "--output", default="facts.json", help="Output file path")
def create_facts(output: str) -> None:
    """Write a fact snapshot template to edit."""
    with open(output, "w", encoding="utf-8") as f:
        json.dump(_FACTS_TEMPLATE, f, indent=2)
    click.echo(f"Facts template written to {output}")
    click.echo("Edit the file, then run: depadvice compute " + output)


@main.command()
@click.argument("facts_file", type=click.Path(exists=True))
@click.option(
    "-c", "--config", "config_file", type=click.Path(exists=True), default=None,
    help="JSON advice configuration",
)
def compute(facts_file: str, config_file: str | None) -> None:
    """Compute advice for FACTS_FILE and print it as JSON."""
    try:
        config = AdviceConfig.load(config_file) if config_file else AdviceConfig()
        facts = load_facts(facts_file)
        builder = config.filter_spec_builder()
    except AdviceError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if config.facade_groups:
        facts = replace(facts, facade_groups=facts.facade_groups | set(config.facade_groups))

    computed = Advisor(facts, ignore_ktx=config.ignore_ktx).compute(builder)
    log.debug("cli.computed", facts=facts_file, advice=len(computed.advice))
    click.echo(json.dumps([a.to_dict() for a in computed.advice], indent=2))
