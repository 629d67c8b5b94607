"""
Utilities for handling noisy native audio imports and ALSA/JACK chatter.
"""
import os
import functools


# Keep PortAudio from trying to spawn a JACK server when probing devices
os.environ.setdefault("JACK_NO_START_SERVER", "1")


def with_suppressed_audio_warnings(func):
    """
    Decorator that silences native audio warnings during a function call.
    This temporarily redirects stderr at the file descriptor level.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            original_stderr_fd = os.dup(2)
            null_fd = os.open(os.devnull, os.O_WRONLY)
            os.dup2(null_fd, 2)
            os.close(null_fd)
        except OSError:
            original_stderr_fd = None

        try:
            return func(*args, **kwargs)
        finally:
            if original_stderr_fd is not None:
                os.dup2(original_stderr_fd, 2)
                os.close(original_stderr_fd)

    return wrapper


@with_suppressed_audio_warnings
def load_pyaudio():
    """
    Import pyaudio lazily so the package works on machines without PortAudio.

    Raises:
        ImportError: If pyaudio (or its native library) is not installed
    """
    import pyaudio
    return pyaudio
