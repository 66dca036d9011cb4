"""Tests for the Windows console toggle."""

import ctypes
import sys

import pytest

from mcansi.console import (
    ENABLE_VIRTUAL_TERMINAL_PROCESSING,
    STD_OUTPUT_HANDLE,
    enable_virtual_terminal,
)


class FakeKernel32:
    """Stands in for the kernel32 console functions."""

    def __init__(self, is_console: bool = True, mode: int = 3) -> None:
        self.is_console = is_console
        self.mode = mode
        self.handles: list[int] = []
        self.set_calls: list[tuple[int, int]] = []

    def GetStdHandle(self, std_handle: int) -> int:
        self.handles.append(std_handle)
        return 42

    def GetConsoleMode(self, handle: int, mode) -> int:
        if not self.is_console:
            return 0
        mode._obj.value = self.mode
        return 1

    def SetConsoleMode(self, handle: int, mode: int) -> int:
        self.set_calls.append((handle, mode))
        return 1


class FakeWindll:
    def __init__(self, kernel32: FakeKernel32) -> None:
        self.kernel32 = kernel32


@pytest.fixture
def windows(monkeypatch):
    def install(kernel32: FakeKernel32) -> FakeKernel32:
        monkeypatch.setattr(sys, "platform", "win32")
        monkeypatch.setattr(ctypes, "windll", FakeWindll(kernel32), raising=False)
        return kernel32

    return install


def test_not_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert enable_virtual_terminal() is False


class TestWindows:
    def test_enables_processing(self, windows):
        kernel32 = windows(FakeKernel32(mode=3))
        assert enable_virtual_terminal() is True
        assert kernel32.handles == [STD_OUTPUT_HANDLE]
        assert kernel32.set_calls == [(42, 3 | ENABLE_VIRTUAL_TERMINAL_PROCESSING)]

    def test_not_a_console(self, windows):
        kernel32 = windows(FakeKernel32(is_console=False))
        assert enable_virtual_terminal() is False
        assert kernel32.set_calls == []
