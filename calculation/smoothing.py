import numpy as np

from .calculation_config import HISTORY_SIZE


class MovingAverage:
    def __init__(self, size: int = HISTORY_SIZE):
        """
        Fixed-size moving average over the most recent raw samples.

        The buffer starts zeroed and is never reset, so the first `size` results
        are biased toward zero.

        Args:
            size (int, optional): Number of samples averaged. Defaults to 10.
        """
        self.size = size
        self.history = np.zeros(size)
        self.index = 0

    def smooth(self, sample: int) -> float:
        self.history[self.index] = sample
        self.index = (self.index + 1) % self.size
        return float(np.mean(self.history))
