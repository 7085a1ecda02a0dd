import os
from dotenv import load_dotenv

load_dotenv()

# 🔑 이미지 생성 (Google GenAI REST)
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GOOGLE_MODEL = os.getenv("GOOGLE_MODEL", "gemini-2.5-flash-image-preview")
GOOGLE_API_BASE = os.getenv("GOOGLE_API_BASE", "https://generativelanguage.googleapis.com/v1beta")

# 🌤 날씨
OPENMETEO_URL = os.getenv("OPENMETEO_URL", "https://api.open-meteo.com/v1/forecast")

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

CITY_DATA_PATH = os.getenv("CITY_DATA_PATH", os.path.join(BASE_DIR, "cities500.json"))
PUBLIC_FOLDER = os.getenv("PUBLIC_FOLDER", os.path.join(BASE_DIR, "public"))
IMAGE_FOLDER = os.getenv("IMAGE_FOLDER", os.path.join(PUBLIC_FOLDER, "img"))

# ⏱ 단계별 타임아웃 (초)
WEATHER_TIMEOUT = float(os.getenv("WEATHER_TIMEOUT", "15"))
IMAGE_TIMEOUT = float(os.getenv("IMAGE_TIMEOUT", "90"))

IMAGE_TTL_HOURS = int(os.getenv("IMAGE_TTL_HOURS", "24"))
PORT = int(os.getenv("PORT", "3000"))
