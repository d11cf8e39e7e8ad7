"""
Configuration for the TRTC voice demo service.

Values come from environment variables (case-insensitive) or a `.env` file.
The variable names match the ones used by the Tencent Cloud console examples,
e.g. TENCENTCLOUD_SECRET_ID, SDK_APP_ID and VOICE_LIST.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Blank entries such as `SDK_APP_ID=` fall back to the defaults below
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_ignore_empty=True)

    # Tencent Cloud credentials and endpoint
    tencentcloud_secret_id: str = ""
    tencentcloud_secret_key: str = ""
    tts_region: str = "ap-beijing"
    tts_endpoint: str = "trtc.ai.tencentcloudapi.com"
    request_timeout: int = 120

    # TRTC application
    sdk_app_id: int = 0
    api_key: str = ""

    # Comma separated preset voice ids
    voice_list: str = ""

    host: str = "0.0.0.0"
    port: int = 3000
    max_upload_bytes: int = 5 * 1024 * 1024
    static_dir: str = "public"
    voices_file: str = "data/cloned_voices.json"

    stream_chunk_count: int = 5
    stream_chunk_delay: float = 0.05

    cors_allow_origins: str = "*"
    log_level: str = "INFO"

    @property
    def voices(self) -> List[str]:
        return [v.strip() for v in self.voice_list.split(",") if v.strip()]

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]
