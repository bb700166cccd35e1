"""Tests that concurrent writers never produce duplicate codes.

Uniqueness is owned by the store's insert_unique; the service holds no locks.
These tests run many shorten calls at once against both backings, including
a scripted generator that forces every thread to fight over the same codes.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from conftest import StubGenerator

from shortlink.core.exceptions import GenerationExhausted
from shortlink.core.generator import RandomCodeGenerator
from shortlink.services.resolver import RedirectResolver
from shortlink.services.shortening import ShorteningService
from shortlink.store.memory import InMemoryMappingStore
from shortlink.store.sql import SQLAlchemyMappingStore

THREADS = 8


def _shorten_with_session(session_factory, generator, url, max_attempts=5):
    db = session_factory()
    try:
        link = ShorteningService(SQLAlchemyMappingStore(db), generator, max_attempts).shorten(url)
        return link.code, link.long_url
    finally:
        db.close()


class TestConcurrentShorten:
    """Prove concurrent shorten calls keep codes unique."""

    def test_memory_store_random_codes(self):
        store = InMemoryMappingStore()
        service = ShorteningService(store, RandomCodeGenerator(length=7))
        urls = [f"https://example.com/page_{i}" for i in range(200)]

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            links = list(pool.map(service.shorten, urls))

        codes = [link.code for link in links]
        assert len(set(codes)) == len(codes)
        assert store.count() == len(urls)

        resolver = RedirectResolver(store)
        for link, url in zip(links, urls):
            assert resolver.resolve(link.code) == url

    def test_memory_store_contended_codes(self):
        """Every thread tries the same code sequence; each code is won exactly once."""
        store = InMemoryMappingStore()
        codes = [f"code{i:03d}" for i in range(THREADS)]
        urls = [f"https://example.com/page_{i}" for i in range(THREADS)]

        def shorten(url):
            return ShorteningService(store, StubGenerator(codes), max_attempts=THREADS).shorten(url)

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            links = list(pool.map(shorten, urls))

        assert sorted(link.code for link in links) == codes
        assert {store.lookup(link.code).long_url for link in links} == set(urls)

    def test_sql_store_random_codes(self, session_factory):
        generator = RandomCodeGenerator(length=7)
        urls = [f"https://example.com/page_{i}" for i in range(40)]

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            results = list(pool.map(lambda url: _shorten_with_session(session_factory, generator, url), urls))

        codes = [code for code, _ in results]
        assert len(set(codes)) == len(codes)
        assert [long_url for _, long_url in results] == urls

        db = session_factory()
        try:
            assert SQLAlchemyMappingStore(db).count() == len(urls)
        finally:
            db.close()

    def test_sql_store_contended_codes(self, session_factory):
        """The unique index decides every race."""
        codes = [f"code{i:03d}" for i in range(THREADS)]
        urls = [f"https://example.com/page_{i}" for i in range(THREADS)]

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            results = list(pool.map(
                lambda url: _shorten_with_session(session_factory, StubGenerator(codes), url, THREADS),
                urls
            ))

        assert sorted(code for code, _ in results) == codes

        db = session_factory()
        try:
            store = SQLAlchemyMappingStore(db)
            assert store.count() == THREADS
            assert {store.lookup(code).long_url for code, _ in results} == set(urls)
        finally:
            db.close()

    @pytest.mark.parametrize("workers", [1, THREADS])
    def test_concurrent_resolve(self, memory_store, workers):
        """Reads during writes see either nothing or the complete record."""
        service = ShorteningService(memory_store, StubGenerator(["Xk9pQ2w"]))
        resolver = RedirectResolver(memory_store)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            reads = [pool.submit(resolver.resolve, "Xk9pQ2w") for _ in range(50)]
            service.shorten("https://example.com/a")
            reads += [pool.submit(resolver.resolve, "Xk9pQ2w") for _ in range(50)]

        results = [future.result() for future in reads]
        assert set(results) <= {None, "https://example.com/a"}
        assert results[-1] == "https://example.com/a"

    def test_concurrent_exhaustion_counted(self):
        """Every exhausted request is counted once, even from many threads."""
        store = InMemoryMappingStore()
        store.insert_unique("AAAAAAA", "https://example.com/existing")
        service = ShorteningService(store, StubGenerator(["AAAAAAA"]), max_attempts=2)
        before = ShorteningService.exhausted_count

        def shorten(url):
            with pytest.raises(GenerationExhausted):
                service.shorten(url)

        with ThreadPoolExecutor(max_workers=THREADS) as pool:
            list(pool.map(shorten, [f"https://example.com/page_{i}" for i in range(400)]))

        assert ShorteningService.exhausted_count == before + 400
        assert store.count() == 1
