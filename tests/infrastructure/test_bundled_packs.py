import asyncio

import pytest

from sprachapp.domain.errors import PackUnavailable
from sprachapp.domain.models import Lang
from sprachapp.infrastructure.adapters.bundled_packs import BundledPackSource


@pytest.mark.asyncio
async def test_fetch_bundled_pack_reports_progress():
    seen = []
    source = BundledPackSource(step_delay=0)

    pack = await source.fetch(Lang.EN, progress=seen.append)

    assert pack.lang == Lang.EN
    assert [v["de"] for v in pack.vocab] == ["laufen", "essen", "Zeit"]
    assert pack.sentences == [{"de": "Ich habe Zeit.", "x": "I have time."}]
    assert seen == list(range(0, 101, 5))


@pytest.mark.asyncio
@pytest.mark.parametrize("lang", list(Lang))
async def test_every_language_has_a_bundled_pack(lang):
    pack = await BundledPackSource(step_delay=0).fetch(lang)

    assert pack.vocab
    assert pack.sentences


@pytest.mark.asyncio
async def test_custom_file_without_language_gives_empty_pack(tmp_path):
    packs = tmp_path / "packs.yaml"
    packs.write_text("EN:\n  vocab:\n    - {de: Katze, x: cat}\n")

    source = BundledPackSource(packs, step_delay=0)

    assert (await source.fetch(Lang.EN)).vocab == [{"de": "Katze", "x": "cat"}]
    assert (await source.fetch(Lang.FR)).is_empty


@pytest.mark.asyncio
async def test_non_list_sections_are_ignored(tmp_path):
    packs = tmp_path / "packs.yaml"
    packs.write_text("ES:\n  vocab: hola\n  sentences:\n    - {de: Ja, x: Sí}\n")

    pack = await BundledPackSource(packs, step_delay=0).fetch(Lang.ES)

    assert pack.vocab == []
    assert len(pack.sentences) == 1


@pytest.mark.asyncio
async def test_missing_file_is_unavailable(tmp_path):
    source = BundledPackSource(tmp_path / "missing.yaml", step_delay=0)

    with pytest.raises(PackUnavailable, match="cannot read"):
        await source.fetch(Lang.EN)


@pytest.mark.asyncio
async def test_invalid_yaml_is_unavailable(tmp_path):
    packs = tmp_path / "packs.yaml"
    packs.write_text("EN: [unclosed\n")

    with pytest.raises(PackUnavailable, match="invalid YAML"):
        await BundledPackSource(packs, step_delay=0).fetch(Lang.EN)


@pytest.mark.asyncio
async def test_cancelled_fetch_delivers_nothing():
    seen = []
    source = BundledPackSource(step_delay=0.05)
    task = asyncio.create_task(source.fetch(Lang.RU, progress=seen.append))

    await asyncio.sleep(0.2)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert seen and seen[-1] < 100
