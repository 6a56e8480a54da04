"""Encoder contract between raw samples and fixed-width SDRs."""

from __future__ import annotations

import abc
from typing import Generic, List, Sequence, TypeVar

InputT = TypeVar("InputT")
SDRT = TypeVar("SDRT")


class SDREncoder(abc.ABC, Generic[InputT, SDRT]):
    """Maps samples to sparse distributed representations of ``sdr_length``.

    Both directions return newly allocated results and leave their argument
    untouched.
    """

    def __init__(self, sdr_length: int) -> None:
        self.sdr_length = int(sdr_length)

    @abc.abstractmethod
    def encode_sample(self, sample: InputT) -> SDRT:
        """Return the SDR of ``sample``."""

    @abc.abstractmethod
    def decode_sample(self, sdr: SDRT) -> InputT:
        """Return the sample represented by ``sdr``."""

    def encode_batch(self, samples: Sequence[InputT]) -> List[SDRT]:
        return [self.encode_sample(sample) for sample in samples]

    def decode_batch(self, sdrs: Sequence[SDRT]) -> List[InputT]:
        return [self.decode_sample(sdr) for sdr in sdrs]
