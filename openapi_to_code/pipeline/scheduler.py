"""
Parallel emission of top-level schemas.
"""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..errors import GenerationError
from ..logging import get_logger
from ..schema_model import SchemaNode
from .state import ErrorAggregator

logger = get_logger("scheduler")


def parallel_generate(
    entries: Iterable[tuple[str, SchemaNode]],
    generate: Callable[[str, SchemaNode, io.StringIO], None],
    errors: ErrorAggregator,
    max_workers: int | None = None,
) -> list[tuple[str, str]]:
    """Run `generate` for every (name, node) entry on a worker pool.

    Each task writes its text into the buffer it is given. Results are
    returned as (name, text) pairs sorted by name, so the output does not
    depend on scheduling. A task that raises is recorded in `errors` and
    keeps whatever text it wrote before failing.
    """
    entries = list(entries)
    if not entries:
        return []

    workers = max(1, min(max_workers or len(entries), len(entries)))
    logger.debug("generating %d schemas on %d workers", len(entries), workers)

    buffers = {name: io.StringIO() for name, _ in entries}
    results: dict[str, str] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(generate, name, node, buffers[name]): name for name, node in entries}
        for future in as_completed(futures):
            name = futures[future]
            try:
                future.result()
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.exception("generating %s failed", name)
                errors.add(GenerationError(f"generation failed: {exc}", path=name))
                if not buffers[name].getvalue():
                    continue
            results[name] = buffers[name].getvalue()

    return sorted(results.items())
