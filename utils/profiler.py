"""
Timing of inference passes.

A CodeProfiler wraps each pass of the engine. Reusing one instance over a
batch accumulates the pass count and timings, so a slow rule base shows up
both per pass and in the summary logged at the end of the run.
"""
import time
import logging

profiler_log = logging.getLogger('profiler')

class CodeProfiler:
    """
    Context manager timing one inference pass per `with` block.

    Example:
        profiler = CodeProfiler("Inference")
        for row in rows:
            with profiler:
                engine.defuzzify()
        profiler.summary()

    Attributes:
        name (str): Label used in the log lines.
        warn_ms (float): A pass slower than this logs a warning.
        elapsed_ms (float): Duration of the last pass.
        runs (int): Number of completed passes.
        total_ms (float): Sum of all pass durations.
        max_ms (float): Slowest pass so far.
    """
    def __init__(self, name="", warn_ms=5.0):
        self.name = name
        self.warn_ms = warn_ms
        self.elapsed_ms = 0.0
        self.runs = 0
        self.total_ms = 0.0
        self.max_ms = 0.0

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000
        self.runs += 1
        self.total_ms += self.elapsed_ms
        self.max_ms = max(self.max_ms, self.elapsed_ms)
        profiler_log.debug("'%s' pass %d: %.3f ms", self.name, self.runs, self.elapsed_ms)
        if self.elapsed_ms > self.warn_ms:
            profiler_log.warning("'%s' pass %d took %.3f ms (limit %.1f ms).",
                                 self.name, self.runs, self.elapsed_ms, self.warn_ms)

    @property
    def mean_ms(self):
        return self.total_ms / self.runs if self.runs else 0.0

    def summary(self):
        """Log and return (runs, mean_ms, max_ms)."""
        profiler_log.info("'%s': %d passes, mean %.3f ms, max %.3f ms",
                          self.name, self.runs, self.mean_ms, self.max_ms)
        return self.runs, self.mean_ms, self.max_ms
