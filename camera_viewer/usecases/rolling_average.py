from typing import List


class RollingAverager:
    """Moving average over a fixed, zero-filled ring buffer."""

    def __init__(self, window_size: int = 5):
        if window_size < 1:
            raise ValueError("window_size must be at least 1")
        self.window: List[float] = [0.0] * window_size
        self.index = 0

    def add(self, value: float) -> float:
        self.window[self.index] = value

        self.index += 1
        if self.index == len(self.window):
            self.index = 0

        return sum(self.window) / len(self.window)
