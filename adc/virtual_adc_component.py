import logging
import time

import numpy as np

from . import BaseADCComponent
from .adc_config import (
    ADC_ADDR,
    ADC_CHANNEL,
    READ_FAILED,
    VIRTUAL_SIGNAL_FREQ,
    VIRTUAL_NOISE_LEVEL,
)

logger = logging.getLogger(__name__)


class VirtualADCComponent(BaseADCComponent):
    def __init__(
        self,
        addr: int = ADC_ADDR,
        channel: int = ADC_CHANNEL,
        signal_freq: float = VIRTUAL_SIGNAL_FREQ,
        noise_level: float = VIRTUAL_NOISE_LEVEL,
        failure_rate: float = 0.0,
        seed: int | None = None,
        clock=time.monotonic,
    ):
        """
        Simulated converter producing a slow sine sweep with gaussian noise.

        Args:
            addr: Simulated address (unused but required for interface consistency).
            channel: Simulated input channel.
            signal_freq: Frequency of the synthetic sweep in Hz.
            noise_level: Standard deviation of the noise in converter codes.
            failure_rate: Probability that a read returns READ_FAILED.
            seed: Seed for the random generator.
            clock: Monotonic time source in seconds.
        """
        super().__init__(addr=addr, channel=channel)
        self.signal_freq = signal_freq
        self.noise_level = noise_level
        self.failure_rate = failure_rate
        self.rng = np.random.default_rng(seed)
        self.clock = clock

    def probe(self) -> bool:
        logger.info(f"virtual ADC-> addr={self.addr}")
        return True

    def read(self, channel: int) -> int:
        if self.failure_rate and self.rng.random() < self.failure_rate:
            return READ_FAILED
        t = self.clock()
        value = 127.5 + 120 * np.sin(2 * np.pi * self.signal_freq * t)
        value += self.rng.normal(0, self.noise_level)
        return int(np.clip(round(value), 0, 255))
