# utils/_timer.py
"""Context manager for timing and logging blocks of code."""

__all__ = [
    "TimedBlock",
]

import io
import os
import sys
import time
import signal
import logging
import collections


class TimedBlock:
    r"""Context manager for timing a block of code and reporting the timing.

    Every completed block is logged at the ``INFO`` level, and the number of
    calls and the total elapsed time are accumulated in a registry shared by
    all instances, keyed by the message. The package wraps kernel-matrix
    assembly and factorizations in (non-printing) timed blocks, so the
    registry doubles as a profile of the setup work; see :meth:`summary()`.

    Parameters
    ----------
    message : str
        Message to log / print.
    timelimit : int
        Number of seconds to wait before raising an error.
        Floats are rounded down to an integer.
    verbose : bool or None
        If ``True``, print the message and the elapsed time to the screen.
        If ``None`` (default), use the class attribute :attr:`verbose`.

    Warnings
    --------
    The ``timelimit`` may only function on Linux/Unix machines
    (Windows is not currently supported).

    Examples
    --------
    >>> import time
    >>> import kernelinterp as ki

    >>> with ki.utils.TimedBlock("This is a test"):
    ...     time.sleep(3)
    This is a test...done in 3.00 s.

    Set up a logfile to record messages to.

    >>> ki.utils.TimedBlock.add_logfile("log.log")
    Logging to '/path/to/current/folder/log.log'

    Capture the time elapsed for later use.

    >>> with ki.utils.TimedBlock("how long?") as timer:
    ...     time.sleep(2)
    >>> timer.elapsed
    2.002866268157959

    Time the internal work of an interpolation.

    >>> ki.utils.TimedBlock.reset()
    >>> itp = ki.interpolate(nodes, values, ki.GaussKernel(2))
    >>> print(ki.utils.TimedBlock.summary())
    """

    verbose = True
    rebuffer = False
    formatter = logging.Formatter(
        fmt="%(asctime)s  %(levelname)s:\t%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    timings = collections.defaultdict(lambda: [0, 0.0])

    def __init__(
        self,
        message: str = "Running code block",
        timelimit: int = None,
        verbose: bool = None,
    ):
        """Store print/log message."""
        self.__original_stdout = sys.stdout
        self.__new_buffer = None
        self.__front = "\n" if message.endswith("\n") else ""
        self.message = message.rstrip()
        self.__back = "\n" if "\r" not in message else ""
        if timelimit is not None:
            timelimit = max(int(timelimit), 1)
        self.__timelimit = timelimit
        self.__verbose = self.verbose if verbose is None else verbose
        self.__elapsed = None

    @property
    def timelimit(self):
        """Time limit (in seconds) for the block to complete."""
        return self.__timelimit

    @property
    def elapsed(self):
        """Actual time (in seconds) the block took to complete."""
        return self.__elapsed

    @staticmethod
    def _signal_handler(signum, frame):
        raise TimeoutError("timed out!")

    def _reset_stdout(self):
        text = self.__new_buffer.getvalue()
        sys.stdout = self.__original_stdout
        print(text, end="", flush=True)

    def __enter__(self):
        """Print the message and record the current time."""
        if self.rebuffer:
            sys.stdout = self.__new_buffer = io.StringIO()
        if self.__verbose:
            print(f"{self.message}...", end=self.__front, flush=True)
        self._tic = time.time()
        if self.timelimit is not None:
            signal.signal(signal.SIGALRM, self._signal_handler)
            signal.alarm(self.timelimit)
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        """Calculate, record, and report the elapsed time."""
        self._toc = time.time()
        if self.timelimit is not None:
            signal.alarm(0)
        elapsed = self._toc - self._tic
        if exc_type:  # Report an exception if present.
            if self.timelimit is not None and exc_type is TimeoutError:
                if self.__verbose:
                    print(flush=True)
                report = f"TIMED OUT after {elapsed:.2f} s."
                logging.info(f"{self.message}...{report}")
                if self.rebuffer:
                    self._reset_stdout()
                raise TimeoutError(report)
            if self.__verbose:
                print(f"{exc_type.__name__}: {exc_value}")
            logging.info(self.message)
            logging.error(
                f"({exc_type.__name__}) {exc_value} "
                f"(raised after {elapsed:.6f} s)"
            )
            if self.rebuffer:
                self._reset_stdout()
            raise
        else:  # If no exception, report execution time.
            if self.__verbose:
                print(f"done in {elapsed:.2f} s.", flush=True, end=self.__back)
            logging.info(f"{self.message}...done in {elapsed:.6f} s.")
        self.__elapsed = elapsed
        record = self.timings[self.message]
        record[0] += 1
        record[1] += elapsed
        if self.rebuffer:
            self._reset_stdout()
        return

    # Registry ----------------------------------------------------------------
    @classmethod
    def summary(cls) -> str:
        """Tabulate the number of calls and the total / mean time of every
        block recorded since the last :meth:`reset()`.

        Returns
        -------
        report : str
            One line per message, sorted by total time (largest first).
        """
        if not cls.timings:
            return "No timed blocks recorded"
        width = max(len(message) for message in cls.timings)
        out = [
            f"{'Section':<{width}}  {'ncalls':>6}  "
            f"{'total (s)':>10}  {'mean (s)':>10}"
        ]
        totals = {key: val[1] for key, val in cls.timings.items()}
        for message in sorted(totals, key=totals.get, reverse=True):
            ncalls, total = cls.timings[message]
            out.append(
                f"{message:<{width}}  {ncalls:>6d}  "
                f"{total:>10.4f}  {total / ncalls:>10.4f}"
            )
        return "\n".join(out)

    @classmethod
    def reset(cls) -> None:
        """Forget all recorded timings."""
        cls.timings.clear()

    @classmethod
    def add_logfile(cls, logfile: str = "log.log") -> None:
        """Instruct :class:`TimedBlock` to log messages to the ``logfile``.

        Parameters
        ----------
        logfile : str
            File to log to.
        """
        logger = logging.getLogger()
        logpath = os.path.abspath(logfile)

        # Check that we aren't already logging to this file.
        for handler in logger.handlers:
            if (
                isinstance(handler, logging.FileHandler)
                and os.path.abspath(handler.baseFilename) == logpath
            ):
                if cls.verbose:
                    print(f"Already logging to {logpath}")
                return

        # Add a new handler for this file.
        newhandler = logging.FileHandler(logpath, "a")
        newhandler.setFormatter(cls.formatter)
        newhandler.setLevel(logging.INFO)
        logger.setLevel(logging.INFO)
        logger.addHandler(newhandler)
        if cls.verbose:
            print(f"Logging to '{os.path.abspath(logfile)}'")
