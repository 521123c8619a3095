"""Main CLI interface"""

import logging

import click

from .. import __version__
from ..config.settings import UnitSettings
from ..core.exceptions import ConfigurationError, UnitsError, create_error_summary
from ..formatting import STYLES, format_lat_lon, format_quantity
from ..infrastructure.logging.unit_logger import setup_logging, shutdown_logging

logger = logging.getLogger('unitfmt.cli')

# Let negative numbers through as arguments
NUMERIC_ARGS = {'ignore_unknown_options': True}


@click.group()
@click.version_option(version=__version__, prog_name='unitfmt')
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False), help='JSON configuration file')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Write a log to this file')
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
@click.pass_context
def cli(ctx, config, log_file, verbose):
    """unitfmt - unit conversion and quantity formatting"""

    try:
        settings = UnitSettings.from_file(config) if config else UnitSettings()
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    if log_file:
        settings.log_file = log_file
    if verbose:
        settings.verbose = True

    if settings.log_file:
        setup_logging(settings.log_file, verbose=settings.verbose)
        ctx.call_on_close(shutdown_logging)

    ctx.obj = {
        'settings': settings,
        'converter': settings.build_converter(),
    }


def _run(operation, *args, **kwargs):
    """Call a library operation, turning library errors into CLI errors"""
    try:
        return operation(*args, **kwargs)
    except UnitsError as e:
        logger.error(str(e))
        raise click.ClickException(str(e))


@cli.command('to-internal', context_settings=NUMERIC_ARGS)
@click.argument('value', type=float)
@click.argument('unit')
@click.option('--no-parse', is_flag=True, help='Only accept registered unit symbols')
@click.option('--quiet', '-q', is_flag=True, help='Print nan instead of failing')
@click.pass_obj
def to_internal(obj, value, unit, no_parse, quiet):
    """Convert VALUE given in UNIT to internal units"""
    converter = obj['converter']
    result = _run(converter.to_internal, value, unit,
                  parse_compound=not no_parse, fail_loud=not quiet)
    logger.info(f"to-internal {value} {unit!r} -> {result}")
    click.echo(result)


@cli.command('from-internal', context_settings=NUMERIC_ARGS)
@click.argument('value', type=float)
@click.argument('unit')
@click.option('--no-parse', is_flag=True, help='Only accept registered unit symbols')
@click.option('--quiet', '-q', is_flag=True, help='Print nan instead of failing')
@click.pass_obj
def from_internal(obj, value, unit, no_parse, quiet):
    """Convert VALUE given in internal units to UNIT"""
    converter = obj['converter']
    result = _run(converter.from_internal, value, unit,
                  parse_compound=not no_parse, fail_loud=not quiet)
    logger.info(f"from-internal {value} {unit!r} -> {result}")
    click.echo(result)


@cli.command(context_settings=NUMERIC_ARGS)
@click.argument('value', type=float)
@click.argument('from_unit')
@click.argument('to_unit')
@click.pass_obj
def convert(obj, value, from_unit, to_unit):
    """Convert VALUE from FROM_UNIT to TO_UNIT"""
    result = _run(obj['converter'].convert, value, from_unit, to_unit)
    click.echo(result)


@cli.command()
@click.argument('units', nargs=-1, required=True)
@click.option('--no-parse', is_flag=True, help='Only accept registered unit symbols')
@click.pass_obj
def check(obj, units, no_parse):
    """Check that each of UNITS can be converted"""
    converter = obj['converter']
    errors = []

    for unit in units:
        try:
            multiplier = converter.to_internal(1.0, unit, parse_compound=not no_parse, fail_loud=True)
        except UnitsError as e:
            errors.append(e)
            click.echo(f"{unit}: invalid ({e})")
        else:
            click.echo(f"{unit}: ok ({multiplier})")

    if errors:
        summary = create_error_summary(errors)
        counts = ", ".join(f"{name}={count}" for name, count in sorted(summary['error_counts'].items()))
        click.echo(f"{summary['total_errors']} of {len(units)} units invalid: {counts}")
        raise click.exceptions.Exit(1)


@cli.command('format', context_settings=NUMERIC_ARGS)
@click.argument('value', type=float)
@click.option('--unit', '-u', default='', help='Display unit')
@click.option('--style', '-s', type=click.Choice(STYLES), default='plain', help='Rendering style')
@click.option('--digits', '-d', type=int, default=None, help='Significant digits')
@click.option('--unicode', is_flag=True, help='Unicode exponents and micro sign')
@click.pass_obj
def format_value(obj, value, unit, style, digits, unicode):
    """Render VALUE (internal units) in a display unit"""
    digits = digits if digits is not None else obj['settings'].significant_digits
    text = _run(format_quantity, value, unit, obj['converter'],
                style=style, digits=digits, unicode=unicode)
    click.echo(text)


@cli.command(context_settings=NUMERIC_ARGS)
@click.argument('latitude', type=float)
@click.argument('longitude', type=float)
@click.option('--unit', '-u', default='deg', show_default=True, help='Unit of the input angles')
@click.option('--decimal', is_flag=True, help='Decimal degrees instead of degrees, minutes, seconds')
@click.option('--precision', '-p', type=int, default=None, help='Decimal places')
@click.pass_obj
def latlon(obj, latitude, longitude, unit, decimal, precision):
    """Render a LATITUDE/LONGITUDE pair"""
    text = _run(format_lat_lon, latitude, longitude, unit, obj['converter'],
                decimal=decimal, precision=precision)
    click.echo(text)


def main():
    cli()


if __name__ == '__main__':
    main()
