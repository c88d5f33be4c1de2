"""Default endpoints and location used when the config file is silent."""

KMA_BASE_URL = "https://apis.data.go.kr/1360000/VilageFcstInfoService_2.0"
SERVICE_KEY_ENV = "DOROSEE_KMA_SERVICE_KEY"
PLACEHOLDER_SERVICE_KEY = "your_weather_api_key_here"

# Seoul City Hall; also the fallback location throughout the app.
DEFAULT_LATITUDE = 37.5665
DEFAULT_LONGITUDE = 126.9780
