"""Command-line interface for the DynamoDB JSON transformer."""

import logging

import click

from . import __version__
from .transformer import DynamoJSONTransformer


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command()
@click.version_option(version=__version__)
@click.option('--config', default='schema.json', show_default=True,
              help='Typed JSON file to read')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output on stderr')
def main(config: str, verbose: bool):
    """Convert a DynamoDB typed JSON file into plain JSON on stdout."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=click.get_text_stream('stderr')
    )

    transformer = DynamoJSONTransformer(enable_profiling=verbose)
    result = transformer.transform_file(config)

    if not result.success:
        # errors go to stdout and the exit status stays 0
        for error in result.errors or []:
            click.echo(f"error : {error}")
        return

    transformer.writer.write(result.json_string)
    if transformer.profiler:
        logger.debug(f"Performance summary: {transformer.profiler.get_performance_summary()}")


if __name__ == '__main__':
    main()
