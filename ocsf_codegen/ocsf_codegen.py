import json
import logging
from sys import stderr
from time import perf_counter

import click

from . import __version__
from .exceptions import CodegenError
from .pipeline import CodeGeneratorConfig, OptionalityPolicy, OutputMode, PipelineGenerator

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option(
    "--optionality",
    default=None,
    type=click.Choice([p.value for p in OptionalityPolicy]),
    help="Field optionality policy: 'always' makes every field optional, 'requirement' follows required attributes",
)
@click.option("--catch-all-field", default=None, type=str, help="Name of the field capturing undeclared keys")
@click.option("--no-catch-all", is_flag=True, default=False, help="Generate types without a catch-all field")
@click.option(
    "--validation/--no-validation",
    default=None,
    help="Add runtime type checks in __post_init__",
)
@click.option("--format", "format_", is_flag=True, default=False, help="Format the output with black")
@click.option("--error-if-exists", is_flag=True, default=False, help="Fail if the output file already exists")
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Log level; logs are written to standard error",
)
@click.version_option(__version__, prog_name="ocsf_codegen")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(dir_okay=False, resolve_path=True))
def ocsf_codegen(config, optionality, catch_all_field, no_catch_all, validation, format_, error_if_exists, log_level, path, output):
    """Generate Python dataclasses from the OCSF schema at PATH into OUTPUT."""
    logging.basicConfig(
        format="%(levelname)s: %(message)s",
        style="%",
        stream=stderr,
        level=log_level,
    )

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if optionality is not None:
        config.optionality = OptionalityPolicy(optionality)
    if catch_all_field is not None:
        config.catch_all_field = catch_all_field
    if no_catch_all:
        config.catch_all_field = ""
    if validation is not None:
        config.add_validation = validation
    if format_:
        config.formatter.enabled = True
    if error_if_exists:
        config.output.mode = OutputMode.ERROR_IF_EXISTS

    start_seconds = perf_counter()

    try:
        with open(path, encoding="utf-8") as f:
            codegen = PipelineGenerator(f.read(), config)
        written = codegen.write(output)
    except (CodegenError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e

    duration = perf_counter() - start_seconds
    if written:
        logger.info("Generated %s in %.3f seconds", output, duration)
    else:
        logger.info("%s is up to date (%.3f seconds)", output, duration)
