# io/guidance_logging.py
import json
import logging
import sys
from dataclasses import asdict

from turnkit.app.protocols import NoopHooks
from turnkit.domain.entities.instruction import TurnInstruction


class GuidanceJsonFormatter(logging.Formatter):
    """One JSON object per line; event fields ride on `record.extra`."""

    def format(self, record: logging.LogRecord) -> str:
        line = dict(
            ts=self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            level=record.levelname,
            logger=record.name,
            msg=record.getMessage(),
        )
        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            line.update(fields)
        return json.dumps(line, default=str)


def _default_json_logger(name: str = "turnkit", level: str = "INFO") -> logging.Logger:
    # configure once per process; later calls reuse the handler
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(GuidanceJsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def _shape_instruction(instruction: TurnInstruction) -> dict:
    return {k: v.name for k, v in asdict(instruction).items()}


class GuidanceLogging(NoopHooks):
    """
    Structured logs for the guidance toolkit. Anomalies log at WARNING,
    per-edge chatter only in debug mode and only every `sample_every` hits.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)
        self._short_edges = 0
        self._resolves = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # --------------- Sampler -----------------------------

    def short_edge(self, *, edge_id, length_m, target_m):
        self._short_edges += 1
        if self.debug and (self._short_edges % self.sample_every) == 0:
            self._emit(
                "DEBUG",
                "sampler_short_edge",
                edge_id=edge_id,
                length_m=length_m,
                target_m=target_m,
                seen=self._short_edges,
            )

    def degenerate_segment(self, *, edge_id, index):
        self._emit("WARNING", "sampler_degenerate_segment", edge_id=edge_id, index=index)

    # --------------- Resolver -----------------------------

    def resolved(self, *, before, after, neighbor, ok):
        self._resolves += 1
        if self.debug and (self._resolves % self.sample_every) == 0:
            self._emit(
                "DEBUG",
                "resolve",
                ok=ok,
                before=_shape_instruction(before),
                after=_shape_instruction(after),
                neighbor=_shape_instruction(neighbor),
            )

    # --------------- Lifecycle -----------------------------

    def build_done(self, **extra):
        self._emit("INFO", "build_done", **extra)

    @property
    def counters(self) -> dict[str, int]:
        return {"short_edges": self._short_edges, "resolves": self._resolves}
