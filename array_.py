import numpy as np


class Array:
    """Fixed number of object slots, allocated once and never resized."""

    def __init__(self, size):
        self.size = size
        self.elements = np.empty(size, dtype=object)

    def get(self, i):
        if i < 0 or i >= self.size:
            return None
        return self.elements[i]

    def set(self, i, data):
        self.elements[i] = data

    def swap(self, a, b):
        elements = self.elements
        elements[a], elements[b] = elements[b], elements[a]

    def clear(self, i):
        # Drop the reference so the caller's handle is not kept alive
        self.elements[i] = None

    def free(self):
        self.elements = np.empty(0, dtype=object)
        self.size = 0
