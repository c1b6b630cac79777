def static_loader(entries):
    calls = {"count": 0}

    async def _load():
        calls["count"] += 1
        return entries

    _load.calls = calls
    return _load


async def failing_loader():
    raise RuntimeError("lexicon feed unreachable")
