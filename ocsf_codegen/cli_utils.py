"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "ocsf_codegen"

# Parameters with no effect on the generated code
OUTPUT_NEUTRAL_PARAMS = frozenset({"log_level", "error_if_exists"})


def reconstruct_command_line(click_command: click.Command | None = None) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Path parameters are shown by file name only, so the result does not
    depend on the working directory or on whether the output exists yet.
    Parameters in OUTPUT_NEUTRAL_PARAMS are left out.

    Args:
        click_command: Click command object for introspection, defaults to
            the command of the current context

    Returns:
        Reconstructed command line string
    """
    # Try to get current Click context for parameter values
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        # No active context, return basic command
        return PROGRAM_NAME

    cli_args = ctx.params
    if not cli_args:
        return PROGRAM_NAME

    click_command = click_command or ctx.command
    cmd_parts = [PROGRAM_NAME]

    arguments = []  # For positional arguments
    options = []  # For optional arguments

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args or param_name in OUTPUT_NEUTRAL_PARAMS:
            continue

        value = cli_args[param_name]
        if value is None or value == "":
            continue

        if isinstance(param, click.Argument):
            arguments.append(_format_value(param, value))

        elif isinstance(param, click.Option):
            # Skip if it's the default value
            if value == param.default:
                continue

            if param.is_flag:
                # Boolean flags and flag pairs: show the flag that was used
                if value:
                    options.append(param.opts[0])
                elif param.secondary_opts:
                    options.append(param.secondary_opts[0])
                continue

            flag = param.opts[0] if param.opts else f"--{param_name}"
            options.extend([flag, _format_value(param, value)])

    # Combine: command + arguments + options
    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)


def _format_value(param: click.Parameter, value) -> str:
    """Format a parameter value, showing paths by file name."""
    if isinstance(param.type, click.Path) or isinstance(value, Path):
        return Path(str(value)).name
    return str(value)
