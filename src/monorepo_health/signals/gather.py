"""Parallel per-package signal gathering."""

import os
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Optional, Sequence

from ..logging_config import get_logger
from ..models import PackageDescriptor
from .base import ExternalSignals, SignalProvider

logger = get_logger(__name__)


def collect_package_signals(
    descriptor: PackageDescriptor,
    root: Path,
    providers: Sequence[SignalProvider],
    cancelled: Optional[threading.Event] = None,
) -> ExternalSignals:
    """Run every provider for one package and merge the results in order.

    Once ``cancelled`` is set, remaining providers are skipped.
    """
    signals = ExternalSignals()
    for provider in providers:
        if cancelled is not None and cancelled.is_set():
            break
        try:
            signals = signals.merge(provider.collect(descriptor, root))
        except Exception as e:
            logger.warning(f"{provider.name} signals unavailable for {descriptor.name}: {e}")
            signals = signals.merge(
                ExternalSignals.failed(f"{provider.name} signals unavailable: {e}")
            )
    return signals


def gather_signals(
    descriptors: Sequence[PackageDescriptor],
    root: Path,
    providers: Sequence[SignalProvider],
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
) -> dict[str, ExternalSignals]:
    """Collect signals for all packages concurrently.

    Returns only after every package has either finished or been given up
    on. Packages still running when ``timeout`` expires get an empty signal
    bundle with a timeout note, and their workers are told to stop: no
    further provider runs, and providers with a ``cancel()`` method start no
    further commands. A command already running ends at its own timeout.
    Keys follow descriptor order.
    """
    if not descriptors:
        return {}

    max_workers = workers or min(32, (os.cpu_count() or 1) + 4)
    results: dict[str, ExternalSignals] = {}
    cancelled = threading.Event()

    executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        futures = {
            executor.submit(collect_package_signals, d, root, providers, cancelled): d
            for d in descriptors
        }
        done, not_done = wait(futures, timeout=timeout)
        for future in done:
            results[futures[future].name] = future.result()
        if not_done:
            _cancel_providers(providers, cancelled)
        for future in not_done:
            name = futures[future].name
            future.cancel()
            logger.warning(f"Signal collection for {name} timed out after {timeout}s")
            results[name] = ExternalSignals.failed("Signal collection timed out")
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    logger.debug(f"Gathered signals for {len(results)} packages with {max_workers} workers")
    return {d.name: results[d.name] for d in descriptors}


def _cancel_providers(providers: Sequence[SignalProvider], cancelled: threading.Event) -> None:
    cancelled.set()
    for provider in providers:
        cancel = getattr(provider, "cancel", None)
        if callable(cancel):
            cancel()
