import pytest
from keyed_repeat import BindingSiteCache, MemoryContainer, default_cache


@pytest.fixture(autouse=True)
def _clear_default_cache():  # pyright: ignore[reportUnusedFunction]
	default_cache.clear()
	yield
	default_cache.clear()


@pytest.fixture
def container() -> MemoryContainer:
	return MemoryContainer()


@pytest.fixture
def cache() -> BindingSiteCache:
	return BindingSiteCache()
