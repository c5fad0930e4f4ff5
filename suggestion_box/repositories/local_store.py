"""로컬 키-값 저장소 — JSON 파일 기반.

Local key-value store backed by a single JSON file, standing in for the
browser storage of a single-device install. Values are arbitrary JSON; writes are
read-modify-write under an asyncio lock and replace the file atomically.
"""

import asyncio
import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any


class LocalKeyValueStore:

    def __init__(self, path: Path | str) -> None:
        self.path: Path = Path(path)
        self._lock: asyncio.Lock = asyncio.Lock()

    async def get_item(self, key: str) -> Any | None:
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set_item(self, key: str, value: Any) -> None:
        await self.update_item(key, lambda _current: value)

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            if key in data:
                del data[key]
                await asyncio.to_thread(self._write, data)

    async def update_item(self, key: str, updater: Callable[[Any | None], Any]) -> Any:
        """키의 값을 원자적으로 갱신 (Atomic read-modify-write of one key).

        ``updater`` receives the current value (None when absent) and returns
        the new value. Exceptions raised by ``updater`` leave the file untouched.
        """
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            new_value = updater(data.get(key))
            data[key] = new_value
            await asyncio.to_thread(self._write, data)
            return new_value

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        content = self.path.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError(f"Local store {self.path} must contain a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
