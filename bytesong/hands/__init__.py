"""HANDS — Synthesis & output layer.

- karplus: plucked-string rendering of a Song
- wav: WAV container writer
"""

from bytesong.hands.karplus import KarplusSong, pluck
from bytesong.hands.wav import ChannelMode, WaveWriter

__all__ = [
    "KarplusSong",
    "pluck",
    "ChannelMode",
    "WaveWriter",
]
