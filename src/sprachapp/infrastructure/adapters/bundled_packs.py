"""
Bundled Pack Source: Infrastructure adapter for language pack acquisition.

Implements PackSource by reading packs from a YAML document and simulating
a download with progress reports.
"""

import asyncio
import logging
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from sprachapp.domain.constants import DOWNLOAD_STEP_DELAY, DOWNLOAD_STEP_PERCENT
from sprachapp.domain.errors import PackUnavailable
from sprachapp.domain.models import Lang, PackContent
from sprachapp.domain.ports import PackSource, ProgressCallback

logger = logging.getLogger(__name__)


def read_bundled_packs() -> str:
    return resources.files("sprachapp").joinpath("data/packs.yaml").read_text(encoding="utf-8")


class BundledPackSource(PackSource):
    """
    Serves packs from the bundled `data/packs.yaml`, or from a custom YAML file.

    The document maps language codes to `{vocab: [...], sentences: [...]}`.
    Entries are passed through raw; the pack loader validates them.
    """

    def __init__(self, packs_file: Path | None = None, step_delay: float = DOWNLOAD_STEP_DELAY):
        self.packs_file = packs_file
        self.step_delay = step_delay

    async def fetch(self, lang: Lang, progress: ProgressCallback | None = None) -> PackContent:
        """
        Fetch the pack for `lang`.

        Progress is reported from 0 to 100. If the task is cancelled before
        the last step, nothing is returned.

        Raises:
            PackUnavailable: If the pack document cannot be read or parsed.
        """
        for percent in range(0, 101, DOWNLOAD_STEP_PERCENT):
            await asyncio.sleep(self.step_delay)
            if progress:
                progress(percent)

        packs = self._read_document()
        return self._pack_for(packs, lang)

    def _read_document(self) -> dict[str, Any]:
        origin = str(self.packs_file) if self.packs_file else "bundled packs"
        try:
            text = (
                self.packs_file.read_text(encoding="utf-8")
                if self.packs_file
                else read_bundled_packs()
            )
            packs = yaml.safe_load(text)
        except OSError as e:
            raise PackUnavailable(f"{origin}: cannot read ({e.strerror})") from e
        except yaml.YAMLError as e:
            raise PackUnavailable(f"{origin}: invalid YAML ({e})") from e

        if packs is None:
            return {}
        if not isinstance(packs, dict):
            raise PackUnavailable(f"{origin}: expected a mapping of language codes")
        return packs

    def _pack_for(self, packs: dict[str, Any], lang: Lang) -> PackContent:
        entry = packs.get(lang.value)
        if entry is None:
            logger.info(f"[pack] No pack for {lang.value}")
            return PackContent(lang=lang)
        if not isinstance(entry, dict):
            logger.warning(f"[pack] Ignoring malformed pack for {lang.value}")
            return PackContent(lang=lang)

        def _list(key: str) -> list:
            value = entry.get(key) or []
            if not isinstance(value, list):
                logger.warning(f"[pack] {lang.value}.{key} is not a list, ignoring it")
                return []
            return value

        return PackContent(lang=lang, vocab=_list("vocab"), sentences=_list("sentences"))
