from dotenv import load_dotenv
load_dotenv()
import logging
import uvicorn
from trtcvoice.config import Settings
from trtcvoice.server.app import get_app
from trtcvoice.store import VoiceStore
from trtcvoice.tts.trtc import TrtcTTS

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

settings = Settings()
tts = TrtcTTS(settings)
store = VoiceStore(settings.voices_file)

app = get_app(settings, tts=tts, store=store)

if __name__ == "__main__":
    uvicorn.run("server:app", host=settings.host, port=settings.port)
