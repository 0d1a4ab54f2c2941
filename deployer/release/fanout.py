"""Hand a sequential artifact stream to a consumer with bounded concurrency.

Building stays sequential; only the consumer (upload, copy) runs on the
thread pool.
"""

from __future__ import annotations

import concurrent.futures
from collections.abc import Callable, Iterable, Iterator

from deployer.core.errors import DeployError
from deployer.core.result import Err, Result
from deployer.resources.byte_source import NamedByteSource

__all__ = ["stream_bounded"]


def stream_bounded[R](
    stream: Iterable[Result[NamedByteSource, DeployError]],
    consumer: Callable[[NamedByteSource], Result[R, DeployError]],
    max_concurrency: int,
) -> Iterator[Result[R, DeployError]]:
    """Yield consumer results as they complete.

    At most ``max_concurrency`` consumers run at once. A failure from the
    stream is yielded after in-flight work has drained, and ends the
    iteration.
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be >= 1")

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_concurrency) as executor:
        pending: set[concurrent.futures.Future[Result[R, DeployError]]] = set()
        for item in stream:
            if isinstance(item, Err):
                for future in concurrent.futures.as_completed(pending):
                    yield future.result()
                yield item
                return

            if len(pending) >= max_concurrency:
                done, pending = concurrent.futures.wait(
                    pending, return_when=concurrent.futures.FIRST_COMPLETED
                )
                for future in done:
                    yield future.result()
            pending.add(executor.submit(consumer, item.value))

        for future in concurrent.futures.as_completed(pending):
            yield future.result()
