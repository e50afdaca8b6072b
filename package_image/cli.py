"""Main CLI entry point."""

import click

from . import __version__
from .commands import package_command
from .config import load_env_file


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="ods-package-image")
def cli():
    """Package container images for ODS pipelines."""


cli.add_command(package_command)


def main():
    """Console script: load .env, then run the CLI."""
    load_env_file()
    cli()


if __name__ == "__main__":
    main()
