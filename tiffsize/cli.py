"""CLI interface for tiffsize -- size and info subcommands."""

import json
import logging
import sys
from pathlib import Path

import click

import tiffsize
from tiffsize.config import ReaderConfig
from tiffsize.log import (
    cli_dim,
    cli_error,
    cli_header,
    cli_success,
    cli_warning,
    log_error,
    log_info,
)
from tiffsize.measure import collect_tiff_files, get_format_info, measure_batch


def _load_config(config_path):
    if not config_path:
        return None
    try:
        return ReaderConfig.from_json(config_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--config')


@click.group()
@click.version_option(version=tiffsize.__version__, prog_name='tiffsize')
@click.option('--debug', is_flag=True, help='Print debug logging to stderr.')
def main(debug):
    """tiffsize -- read TIFF image dimensions from the first IFD.

    Only the file header and a small window around the first image file
    directory are read; pixel data is never decoded.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(levelname)s %(name)s: %(message)s')


@main.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--verbose', '-v', is_flag=True, help='Show timing and file size.')
@click.option('--json-out', type=click.Path(), help='Write results as JSON to file.')
@click.option('--config', 'config_path', type=click.Path(exists=True),
              help='Reader settings JSON (window_size, eof_margin, unknown_byte_order).')
@click.option('--log', type=click.Path(), help='Write log to file.')
def size(path, verbose, json_out, config_path, log):
    """Print the width and height of TIFF files.

    PATH can be a single file or a directory to search recursively.
    """
    input_path = Path(path)
    config = _load_config(config_path)

    files = collect_tiff_files(input_path)
    if not files:
        click.echo(f'No TIFF files found in {input_path}')
        return

    log_file = open(log, 'w') if log else None

    def log_msg(msg, styled=None, error=False):
        click.echo(styled if styled is not None else msg)
        if log_file:
            log_file.write((log_error(msg) if error else log_info(msg)) + '\n')
            log_file.flush()

    try:
        log_msg(f'Measuring {len(files)} file(s)...',
                cli_header(f'Measuring {len(files)} file(s)...'))

        def progress(i, total, filepath, result):
            prefix = f'  [{i}/{total}] {filepath.name}'
            if result.ok:
                msg = f'{prefix}: {result.width}x{result.height}'
                if verbose:
                    msg += f' ({result.file_size} bytes, {result.elapsed_ms:.1f} ms)'
                log_msg(msg, cli_success(msg))
            else:
                msg = f'{prefix}: ERROR: {result.error}'
                log_msg(msg, cli_error(msg), error=True)

        batch = measure_batch(input_path, config=config, progress_callback=progress)

        summary = (f'Summary: {batch.total_files} file(s), '
                   f'{batch.files_measured} measured, {batch.files_errored} failed '
                   f'in {batch.total_time_seconds:.2f}s')
        log_msg('\n' + summary, '\n' + (cli_warning(summary) if batch.files_errored else summary))

        if json_out:
            rows = [{
                'file': str(r.filepath),
                'width': r.width,
                'height': r.height,
                'file_size': r.file_size,
                'elapsed_ms': round(r.elapsed_ms, 2),
                'error': r.error,
            } for r in batch.results]
            with open(json_out, 'w') as f:
                json.dump(rows, f, indent=2)
            log_msg(f'Results written to {json_out}', cli_dim(f'Results written to {json_out}'))
    finally:
        if log_file:
            log_file.close()

    if batch.files_errored > 0:
        sys.exit(1)


@main.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--config', 'config_path', type=click.Path(exists=True),
              help='Reader settings JSON (window_size, eof_margin, unknown_byte_order).')
def info(path, config_path):
    """Show the header and first IFD entries of a TIFF file."""
    filepath = Path(path)

    if filepath.is_dir():
        click.echo('Error: info command requires a single file, not a directory.', err=True)
        sys.exit(1)

    config = _load_config(config_path)
    file_info = get_format_info(filepath, config)

    click.echo(cli_header(f'File: {file_info["filename"]}'))
    click.echo(f'Size on disk: {file_info["file_size"]} bytes')
    click.echo(f'Signature: {file_info["signature"]}')

    for key in ('byte_order', 'ifd_offset', 'window_length'):
        if key in file_info:
            click.echo(f'{key}: {file_info[key]}')

    entries = file_info.get('entries', [])
    if entries:
        click.echo(f'\nEntries ({len(entries)}):')
        for row in entries:
            value = row.get('value', '-')
            click.echo(cli_dim(f'  {row["code"]:>5} {row["name"]:<26} '
                               f'type={row["type"]} count={row["count"]} value={value}'))

    if 'error' in file_info:
        click.echo(cli_error(f'\nError: {file_info["error"]}'))
        sys.exit(1)

    click.echo(cli_success(f'\nDimensions: {file_info["width"]}x{file_info["height"]}'))


if __name__ == '__main__':
    main()
