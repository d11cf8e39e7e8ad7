import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class VoiceStore:
    """
    Flat JSON file holding the voices cloned through this service.

    Each record is {"voiceId", "voiceName", "createdAt"}. Writes go to a
    temporary file first and replace the original, so readers never see a
    half written list.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> List[dict]:
        if not self.path.exists():
            return []
        try:
            records = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable voice store at %s", self.path)
            return []
        return records if isinstance(records, list) else []

    def _save(self, records: List[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise

    def add(self, voice_id: str, voice_name: str) -> dict:
        record = {
            "voiceId": voice_id,
            "voiceName": voice_name,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            records = self._load()
            records.append(record)
            self._save(records)
        return record

    def list(self) -> List[dict]:
        with self._lock:
            return self._load()
