from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class TTSRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None
    voice: Optional[str] = None
    voiceId: Optional[str] = None
    format: Literal["pcm", "wav"] = "pcm"

    @property
    def voice_id(self) -> Optional[str]:
        return self.voiceId or self.voice
