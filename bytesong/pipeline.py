"""BYTESONG pipeline — byte source → Song → plucked strings → WAV bytes."""

from __future__ import annotations

import structlog

from bytesong.config import settings
from bytesong.grid.song import ByteSource, Hasher, Song
from bytesong.hands.karplus import KarplusSong
from bytesong.hands.wav import ChannelMode, WaveWriter

logger = structlog.get_logger()


def render_song(
    source: ByteSource,
    sampling_rate: int | None = None,
    mode: ChannelMode | str | None = None,
) -> tuple[Song, bytes]:
    """Hash `source` and render the resulting song as a WAV container.

    The same input bytes always give byte-identical WAV output.
    """
    sr = sampling_rate or settings.sample_rate
    channels = ChannelMode.parse(mode if mode is not None else settings.channels)

    hasher = Hasher(source)
    song = hasher.hash()
    logger.info(
        "pipeline.hashed",
        bytes_read=hasher.bytes_read,
        digest=song.digest[:16],
        tempo_bpm=song.tempo_bpm,
        scale=song.scale,
    )

    wav = WaveWriter(channels, sr)
    KarplusSong(song, sampling_rate=sr).sound(wav)
    logger.info("pipeline.rendered", frames=wav.frames, sample_rate=sr, channels=channels.name.lower())

    return song, wav.reader().getvalue()
