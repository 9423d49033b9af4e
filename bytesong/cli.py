"""BYTESONG command line.

Usage:
    bytesong -file song.bin          # writes song.wav next to the input
    bytesong -seed 42                # 2 MiB structured corpus → 42.wav
    bytesong -seed 42 -generator holo -size 65536
    bytesong                         # serve the upload page on $PORT
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from bytesong.config import settings
from bytesong.corpus.streams import GENERATORS, open_generator
from bytesong.pipeline import render_song

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bytesong", description="Hash bytes into a plucked-string song.")
    parser.add_argument("-file", default="", help="file to hash")
    parser.add_argument("-seed", type=int, default=0, help="random seed for song")
    parser.add_argument(
        "-generator",
        choices=sorted(GENERATORS),
        default=settings.corpus_generator,
        help="synthetic corpus used with -seed",
    )
    parser.add_argument("-size", type=int, default=settings.corpus_size, help="corpus size in bytes")
    return parser


def _write(path: Path, wav: bytes) -> None:
    try:
        path.write_bytes(wav)
    except OSError as e:
        logger.error("cli.io_error", path=str(path), error=str(e))
        sys.exit(1)
    logger.info("cli.wrote_wav", path=str(path), size_kb=round(len(wav) / 1024, 1))


def wav_path(path: Path) -> Path:
    """WAV path next to `path`, with the name's last extension replaced.

    Everything from the last dot of the name goes, so `.bashrc` becomes
    `.wav` and `a.tar.gz` becomes `a.tar.wav`.
    """
    name = path.name
    dot = name.rfind(".")
    stem = name[:dot] if dot >= 0 else name
    return path.with_name(f"{stem}.wav")


def hash_file(path: Path) -> Path:
    """Render `path` to a WAV next to it, see wav_path()."""
    try:
        source = path.open("rb")
    except OSError as e:
        logger.error("cli.io_error", path=str(path), error=str(e))
        sys.exit(1)

    with source:
        _, wav = render_song(source)

    out = wav_path(path)
    _write(out, wav)
    return out


def hash_seed(seed: int, generator: str, size: int, out_dir: Path | None = None) -> Path:
    """Render a seeded synthetic corpus to `<seed>.wav`."""
    source = open_generator(generator, size, seed)
    logger.info("cli.corpus", generator=generator, size=size, seed=seed)
    with source:
        _, wav = render_song(source)

    out = (out_dir or Path.cwd()) / f"{seed}.wav"
    _write(out, wav)
    return out


def serve() -> None:
    import uvicorn

    from bytesong.api.server import app

    logger.info("cli.serve", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.file:
        hash_file(Path(args.file))
        return 0

    if args.seed != 0:
        try:
            hash_seed(args.seed, args.generator, args.size)
        except ValueError as e:
            logger.error("cli.bad_argument", error=str(e))
            return 2
        return 0

    serve()
    return 0


if __name__ == "__main__":
    sys.exit(main())
