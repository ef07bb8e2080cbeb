from services.storefront_client import LoadResult
from ui.utils.load_cache import cached_load


def counting_loader(*results):
    calls = []
    pending = list(results)

    def load():
        calls.append(1)
        return pending.pop(0)

    return load, calls


def test_successful_result_is_cached():
    cache = {}
    load, calls = counting_loader(LoadResult(data=["ok"]))

    first = cached_load(cache, 10, load)
    second = cached_load(cache, 10, load)

    assert first is second
    assert first.data == ["ok"]
    assert len(calls) == 1


def test_failed_result_is_retried_on_next_call():
    cache = {}
    load, calls = counting_loader(
        LoadResult(data=[], error="Impossible de charger ce producteur."),
        LoadResult(data=["ok"]),
    )

    failed = cached_load(cache, 10, load)
    assert failed.error == "Impossible de charger ce producteur."
    assert 10 not in cache

    retried = cached_load(cache, 10, load)

    assert retried.ok
    assert cache[10] is retried
    assert len(calls) == 2


def test_dropped_result_is_not_cached():
    cache = {}
    load, _ = counting_loader(None)

    assert cached_load(cache, 10, load) is None
    assert cache == {}
