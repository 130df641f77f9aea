import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseToneComponent(ABC):
    def __init__(self):
        """
        Base class for a square-wave tone output.
        """
        self.freq = 0  # Current tone frequency in Hz
        self.playing = False

    def play(self, freq: int) -> None:
        """
        Starts the tone at `freq`, or retunes it if it is already playing.

        Args:
            freq (int): Tone frequency in Hz. Non-positive values stop the tone.
        """
        if freq <= 0:
            self.stop()
            return
        if not self.playing:
            self.start_output(freq)
            self.playing = True
            logger.info(f"tone started at {freq} Hz")
        elif freq != self.freq:
            self.change_output(freq)
        self.freq = freq

    def stop(self) -> None:
        if not self.playing:
            return
        self.stop_output()
        self.playing = False
        logger.info("tone stopped")

    def cleanup(self) -> None:
        self.stop()

    @abstractmethod
    def start_output(self, freq: int) -> None: ...

    @abstractmethod
    def change_output(self, freq: int) -> None: ...

    @abstractmethod
    def stop_output(self) -> None: ...
