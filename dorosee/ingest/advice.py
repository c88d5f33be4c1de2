"""Short advice, emoji and source reliability for a weather report."""

from dorosee.ingest.fallback import SOURCE_LOCATION_TABLE, SOURCE_SEASONAL
from dorosee.ingest.weather_service import SOURCE_KMA

RELIABILITY: dict[str, str] = {
    SOURCE_KMA: "high",
    SOURCE_LOCATION_TABLE: "medium",
    SOURCE_SEASONAL: "medium",
}

CONDITION_EMOJI: dict[str, str] = {
    "맑음": "☀️",
    "구름 조금": "⛅",
    "구름 많음": "☁️",
    "구름많음": "☁️",
    "흐림": "☁️",
    "비": "🌧️",
    "비/눈": "🌨️",
    "소나기": "🌦️",
    "눈": "❄️",
    "안개": "🌫️",
    "뇌우": "⛈️",
}
DEFAULT_EMOJI = "🌤️"

DEFAULT_ADVICE = "좋은 하루 되세요! 😊"


def weather_advice(temperature: int, condition: str) -> str:
    """One temperature tip and one condition tip, joined by a space."""
    parts: list[str] = []

    if temperature >= 30:
        parts.append("매우 더워요! 충분한 수분 섭취하세요 💧")
    elif temperature >= 25:
        parts.append("더운 날씨예요. 시원한 곳을 찾으세요 ☀️")
    elif temperature <= 5:
        parts.append("매우 추워요! 따뜻하게 입으세요 🧥")
    elif temperature <= 10:
        parts.append("쌀쌀해요. 겉옷 챙기세요 🧤")

    # 비/눈 counts as rain.
    if "비" in condition:
        parts.append("우산 꼭 챙기세요! ☔")
    elif "눈" in condition:
        parts.append("눈길 조심하세요! ❄️")
    elif "맑음" in condition:
        parts.append("좋은 날씨네요! 😊")

    return " ".join(parts) if parts else DEFAULT_ADVICE


def reliability_score(source: str) -> str:
    return RELIABILITY.get(source, "low")


def weather_emoji(condition: str) -> str:
    return CONDITION_EMOJI.get(condition, DEFAULT_EMOJI)
