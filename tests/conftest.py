import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import itertools

import numpy as np
import pygame
import pytest


class FakeHost:
    """In-memory host: an off-screen surface and a manually ticked frame queue."""

    def __init__(self, width=400, height=300, surface_available=True):
        self.surface = pygame.Surface((width, height)) if surface_available else None
        self.pending = {}
        self.resize_listeners = []
        self.removed_listeners = 0
        self.cancelled_frames = []
        self._handles = itertools.count(1)

    def get_surface(self):
        return self.surface

    def get_viewport_size(self):
        if self.surface is None:
            return (0, 0)
        return self.surface.get_size()

    def request_frame(self, callback):
        handle = next(self._handles)
        self.pending[handle] = callback
        return handle

    def cancel_frame(self, handle):
        self.cancelled_frames.append(handle)
        self.pending.pop(handle, None)

    def add_resize_listener(self, callback):
        self.resize_listeners.append(callback)

    def remove_resize_listener(self, callback):
        self.removed_listeners += 1
        self.resize_listeners.remove(callback)

    def tick(self, count=1):
        for _ in range(count):
            for handle in list(self.pending):
                callback = self.pending.pop(handle, None)
                if callback is not None:
                    callback()

    def resize(self, width, height):
        self.surface = pygame.Surface((width, height))
        for listener in list(self.resize_listeners):
            listener(width, height)


@pytest.fixture
def make_host():
    return FakeHost


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
