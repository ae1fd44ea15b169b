"""Concurrent readers and writers on one registry.

Readers must only ever observe complete entries (either the old or the new
one), and writers racing on the same name must leave exactly one entry.
"""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from quilltap_providers.base.errors import ProviderDisabledError
from quilltap_providers.bootstrap import BUILTIN_PLUGINS, bootstrap_registry
from quilltap_providers.registry import ProviderRegistry


def test_readers_see_whole_entries_while_writers_toggle():
    reg = bootstrap_registry(ProviderRegistry())
    stop = threading.Event()
    problems = []

    def reader():
        while not stop.is_set():
            for name in reg.get_provider_names():
                entry = reg.get_entry(name)
                if entry is None:
                    continue
                if entry.metadata.provider_name != name or entry.manifest.provider_config.provider_name != name:
                    problems.append(name)
                try:
                    reg.get(name)
                except ProviderDisabledError:
                    pass

    def writer(i):
        source = BUILTIN_PLUGINS[i % len(BUILTIN_PLUGINS)]
        reg.set_enabled(source.name, i % 2 == 0)
        reg.register(source.name, source.factory, source.manifest)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()
    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(writer, range(200)))
    finally:
        stop.set()
        for t in readers:
            t.join(timeout=5)

    assert problems == []  # nosec B101
    assert reg.get_stats().total == len(BUILTIN_PLUGINS)  # nosec B101


def test_concurrent_initialize_never_duplicates():
    reg = ProviderRegistry()
    with ThreadPoolExecutor(max_workers=6) as pool:
        stats = list(pool.map(lambda _: reg.initialize(BUILTIN_PLUGINS), range(12)))
    assert all(s.errors == 0 for s in stats)  # nosec B101
    assert reg.get_provider_names() == sorted(s.name for s in BUILTIN_PLUGINS)  # nosec B101
