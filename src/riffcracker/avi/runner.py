import glob
import os
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Set

import typer
import yaml

from riffcracker.avi import descriptor
from riffcracker.avi.descriptor import AviDescriptor
from riffcracker.avi.preset import avi
from riffcracker.utils.fileio import write_file
from riffcracker.utils.funcutils import flatten

app = typer.Typer()


def get_files(globs: Iterable[str]) -> Set[str]:
    return set(flatten(glob.iglob(fname) for fname in globs))


def summarize(desc: AviDescriptor) -> Dict[str, Any]:
    main_header = desc.header.main_header
    return {
        'main_header': asdict(main_header) if main_header else None,
        'streams': [
            {
                'type': stream.type,
                'handler': stream.handler,
                'frame_rate': stream.frame_rate,
                'width': stream.width,
                'height': stream.height,
                'bit_count': stream.bit_count,
            }
            for stream in desc.header.streams
        ],
        'movie': {
            idx: {
                'frames': len(frames),
                'types': sorted({frame.type for frame in frames}),
            }
            for idx, frames in sorted(desc.movie.items())
        },
    }


@app.command('map')
def map_chunks(
    files: List[str] = typer.Argument(..., help='Files to read from'),
    skip_junk: bool = typer.Option(False, '--skip-junk', help='Drop JUNK chunks'),
) -> None:
    for filename in sorted(get_files(files)):
        basename = os.path.basename(filename)
        print(f'Mapping file: {basename}')
        root = descriptor.from_path(filename, skip_junk=skip_junk)
        avi.render(root)


@app.command('info')
def info(
    files: List[str] = typer.Argument(..., help='Files to read from'),
    skip_junk: bool = typer.Option(False, '--skip-junk', help='Drop JUNK chunks'),
) -> None:
    for filename in sorted(get_files(files)):
        basename = os.path.basename(filename)
        desc = descriptor.parse(descriptor.from_path(filename, skip_junk=skip_junk))
        print(yaml.safe_dump({basename: summarize(desc)}, sort_keys=False), end='')


@app.command('extract')
def extract(
    files: List[str] = typer.Argument(..., help='Files to read from'),
    target_dir: str = typer.Option('out', '--target', '-t', help='Target directory'),
) -> None:
    for filename in sorted(get_files(files)):
        basename = os.path.basename(filename)
        print(f'Extracting frames: {basename}')
        desc = descriptor.parse(descriptor.from_path(filename, skip_junk=True))
        output_dir = os.path.join(target_dir, basename)
        os.makedirs(output_dir, exist_ok=True)
        for idx, frames in sorted(desc.movie.items()):
            for num, frame in enumerate(frames):
                name = f'{idx:02d}{frame.type}_{num:05d}.bin'
                write_file(os.path.join(output_dir, name), bytes(frame.data))


if __name__ == '__main__':
    app()
