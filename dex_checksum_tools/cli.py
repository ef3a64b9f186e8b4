from typing import Callable, TypeVar

import functools
import logging

import click

from .common.utils import BYTE_ORDERS
from .dex import Dex, DexFormatError


logger = logging.getLogger('dex_checksum_tools.cli')

T = TypeVar('T')


def parse_loglevel(ctx: click.Context, param: click.Parameter, level: str) -> int | str:
    try:
        return int(level)
    except ValueError:
        pass
    if level.upper() not in logging.getLevelNamesMapping():
        raise click.BadParameter(f'Unknown log level {level!r}.', ctx=ctx, param=param)
    return level.upper()


def resolve_input_path(input_dex_file: str | None) -> str:
    if input_dex_file is not None and input_dex_file != '-':
        return input_dex_file.strip()
    with click.open_file('-', 'r') as stdin:
        path = stdin.read().strip()
    if not path:
        raise click.UsageError('No input dex file path received from stdin.')
    logger.debug('Input path from stdin: %s', path)
    return path


def report_errors(func: Callable[..., T]) -> Callable[..., T]:
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except DexFormatError as err:
            raise click.ClickException(str(err)) from err
        except OSError as err:
            filename = err.filename if err.filename is not None else ''
            raise click.ClickException(f'{filename!r}: {err.strerror or err}') from err
    return wrapper


def load_dex(ctx: click.Context, path: str) -> Dex:
    return Dex.from_path(path, byteorder=ctx.obj['byte_order'])


@click.group(help='Inspect and correct DEX header checksums. INPUT_DEX_FILE may be "-" or omitted to read the '
                   'path of the input file from stdin.')
@click.option('-l', '--log-level', default='WARNING', show_default=True, callback=parse_loglevel,
              help='Set log level (name or number).')
@click.option('--byte-order', type=click.Choice(BYTE_ORDERS), default='big', show_default=True,
              help='Byte order of the checksum field.')
@click.option('--debug', is_flag=True, hidden=True)
@click.pass_context
def app(ctx: click.Context, log_level: int | str, byte_order: str, debug: bool):
    logging.basicConfig(level=logging.DEBUG if debug else log_level)
    if debug:
        logger.debug('Arguments: %r', ctx.params)
    ctx.ensure_object(dict)
    ctx.obj['byte_order'] = byte_order


@app.command('current-checksum', help='Print the checksum stored in the DEX file\'s header.')
@click.argument('input-dex-file', required=False)
@click.pass_context
@report_errors
def do_current_checksum(ctx: click.Context, input_dex_file: str | None):
    dex = load_dex(ctx, resolve_input_path(input_dex_file))
    click.echo(list(dex.current_checksum()))


@app.command('expect-checksum', help='Print the checksum expected for the DEX file\'s content.')
@click.argument('input-dex-file', required=False)
@click.pass_context
@report_errors
def do_expect_checksum(ctx: click.Context, input_dex_file: str | None):
    dex = load_dex(ctx, resolve_input_path(input_dex_file))
    click.echo(list(dex.expect_checksum()))


@app.command('correct-checksum',
             help='Correct the checksum in the DEX file\'s header if it does not match the expected checksum.')
@click.argument('input-dex-file', required=False)
@click.argument('output-dex-file', required=False)
@click.pass_context
@report_errors
def do_correct_checksum(ctx: click.Context, input_dex_file: str | None, output_dex_file: str | None):
    input_path = resolve_input_path(input_dex_file)
    output_path = output_dex_file if output_dex_file is not None else input_path

    dex = load_dex(ctx, input_path)
    if dex.correct_checksum() or output_path != input_path:
        dex.write_to_file(output_path)
        click.echo('done.')
    else:
        click.echo('nothing to do.')


def main():
    app(obj={})
