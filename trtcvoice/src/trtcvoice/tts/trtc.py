import base64
import logging
import threading

from tencentcloud.common import credential
from tencentcloud.common.common_client import CommonClient
from tencentcloud.common.exception.tencent_cloud_sdk_exception import TencentCloudSDKException
from tencentcloud.common.profile.client_profile import ClientProfile
from tencentcloud.common.profile.http_profile import HttpProfile

from ..config import Settings
from .base import BaseTTS, SpeechResult, TTSError

logger = logging.getLogger(__name__)

SERVICE = "trtc"
API_VERSION = "2019-07-22"


def build_client(settings: Settings) -> CommonClient:
    cred = credential.Credential(settings.tencentcloud_secret_id, settings.tencentcloud_secret_key)

    http_profile = HttpProfile()
    http_profile.endpoint = settings.tts_endpoint
    http_profile.reqTimeout = settings.request_timeout

    client_profile = ClientProfile()
    client_profile.httpProfile = http_profile

    return CommonClient(SERVICE, API_VERSION, cred, settings.tts_region, profile=client_profile)


class TrtcTTS(BaseTTS):
    """Text-to-speech and voice cloning backed by the Tencent Cloud TRTC AI API."""

    sample_rate = 24000

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self._client = client
        self._lock = threading.Lock()

    @property
    def client(self):
        # Built on first use so a missing credential surfaces as a request error
        with self._lock:
            if self._client is None:
                self._client = build_client(self.settings)
            return self._client

    def _call(self, action: str, params: dict) -> dict:
        try:
            client = self.client
            response = client.call_json(action, params)
        except TencentCloudSDKException as e:
            raise TTSError(e.get_message() or str(e)) from e
        return response.get("Response", {})

    def synthesize(self, text: str, voice_id: str) -> SpeechResult:
        response = self._call("TextToSpeech", {
            "Text": text,
            "Voice": {"VoiceId": voice_id},
            "SdkAppId": self.settings.sdk_app_id,
            "APIKey": self.settings.api_key,
        })
        audio = response.get("Audio")
        if not audio:
            raise TTSError("No audio data in response")
        return SpeechResult(audio=audio, sample_rate=self.sample_rate)

    def clone_voice(self, voice_name: str, prompt_audio: bytes) -> str:
        response = self._call("VoiceClone", {
            "SdkAppId": self.settings.sdk_app_id,
            "APIKey": self.settings.api_key,
            "VoiceName": voice_name,
            "PromptAudio": base64.b64encode(prompt_audio).decode("ascii"),
        })
        voice_id = response.get("VoiceId")
        if not voice_id:
            raise TTSError("No VoiceId in response")
        logger.info("Voice clone success: %s", voice_id)
        return voice_id
