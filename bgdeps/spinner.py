"""Terminal status indicator shown while dependencies install."""

import itertools
import sys
import threading

import click

FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
INTERVAL = 0.08


class Spinner:
    """Animated status line on stderr.

    Animates only when stderr is a terminal; otherwise the message is printed
    once and the final symbol is printed when the spinner stops.
    """

    def __init__(self, message: str):
        self.message = message
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._done = False

    def start(self) -> "Spinner":
        if sys.stderr.isatty():
            self._thread = threading.Thread(target=self._animate, daemon=True)
            self._thread.start()
        else:
            click.echo(self.message, err=True)
        return self

    def _animate(self) -> None:
        for frame in itertools.cycle(FRAMES):
            click.echo(f"\r{click.style(frame, fg='cyan')} {self.message}", nl=False, err=True)
            if self._stop.wait(INTERVAL):
                break

    def _finish(self, symbol: str) -> None:
        if self._done:
            return
        self._done = True
        if self._thread is not None:
            self._stop.set()
            self._thread.join()
            click.echo(f"\r{symbol} {self.message}", err=True)
        else:
            click.echo(f"{symbol} {self.message}", err=True)

    def succeed(self) -> None:
        self._finish(click.style("✔", fg="green"))

    def fail(self) -> None:
        self._finish(click.style("✖", fg="red"))


class NullSpinner:
    def succeed(self) -> None:
        pass

    def fail(self) -> None:
        pass


def start_spinner(message: str, hide: bool = False) -> "Spinner | NullSpinner":
    if hide:
        return NullSpinner()
    return Spinner(message).start()


__all__ = ["Spinner", "NullSpinner", "start_spinner"]
