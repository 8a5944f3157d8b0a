"""Static localized copy for each category, plus the "no face" messages."""

import random
from typing import Dict, List, Optional

from .errors import UnknownCategoryError
from .models import CategoryContent, Language

DEFAULT_LANGUAGE: Language = "ko"

CATEGORY_COPY: Dict[str, Dict[str, dict]] = {
    "ko": {
        "tetoman": {
            "title": "테토남 (Teto Man)",
            "description": "당당하고 활동적인 에너지가 넘치는 스타일! 밝고 선명한 분위기로 주변을 환하게 만드는 매력을 가지고 있어요.",
            "traits": ["자신감 넘치는", "활동적인", "리더십 있는", "당당한", "에너지 넘치는"],
            "fun_facts": [
                "김종국처럼 강한 카리스마를 가지고 있어요",
                "옥택연처럼 자연스러운 매력이 돋보여요",
                "안보현처럼 활동적인 에너지가 느껴져요",
            ],
            "celeb_ref": "김종국, 옥택연, 안보현",
        },
        "egenman": {
            "title": "에겐남 (Egen Man)",
            "description": "차분하고 세련된 분위기의 소유자! 부드럽고 온화한 매력으로 편안함을 주는 스타일이에요.",
            "traits": ["차분한", "세련된", "온화한", "신중한", "우아한"],
            "fun_facts": [
                "차은우처럼 세련된 올블랙 스타일이 잘 어울려요",
                "최우식처럼 시스루 부드러움이 매력적이에요",
                "정해인처럼 온화한 분위기를 가지고 있어요",
            ],
            "celeb_ref": "차은우, 최우식, 정해인",
        },
        "tetowoman": {
            "title": "테토녀 (Teto Woman)",
            "description": "생기발랄하고 화려한 매력의 소유자! 밝고 다채로운 에너지로 주목받는 스타일이에요.",
            "traits": ["생기발랄한", "화려한", "매력적인", "당당한", "활기찬"],
            "fun_facts": [
                "송혜교처럼 블랙&화이트 강렬함이 돋보여요",
                "이효리처럼 Y2K 화려함이 잘 어울려요",
                "수지처럼 생기발랄한 컬러가 매력적이에요",
            ],
            "celeb_ref": "송혜교, 이효리, 수지",
        },
        "egenwoman": {
            "title": "에겐녀 (Egen Woman)",
            "description": "자연스럽고 우아한 분위기의 소유자! 부드럽고 단아한 매력으로 편안함을 주는 스타일이에요.",
            "traits": ["자연스러운", "우아한", "부드러운", "단아한", "온화한"],
            "fun_facts": [
                "박보영처럼 베이직 자연스러움이 매력적이에요",
                "장원영처럼 인형같은 부드러움을 가지고 있어요",
                "김태희처럼 단아한 우아함이 돋보여요",
            ],
            "celeb_ref": "박보영, 장원영, 김태희",
        },
    },
    "en": {
        "tetoman": {
            "title": "Teto Man",
            "description": "Confident and energetic style! You have the charm to brighten up your surroundings with a bright and vibrant atmosphere.",
            "traits": ["Confident", "Active", "Leadership", "Bold", "Energetic"],
            "fun_facts": [
                "You have strong charisma like Kim Jong-kook",
                "Your natural charm stands out like Ok Taecyeon",
                "You have active energy like Ahn Bo-hyun",
            ],
            "celeb_ref": "Kim Jong-kook, Ok Taecyeon, Ahn Bo-hyun",
        },
        "egenman": {
            "title": "Egen Man",
            "description": "Calm and sophisticated atmosphere! You have a soft and gentle charm that brings comfort to others.",
            "traits": ["Calm", "Sophisticated", "Gentle", "Thoughtful", "Elegant"],
            "fun_facts": [
                "Sophisticated all-black style suits you like Cha Eun-woo",
                "Your soft transparency is charming like Choi Woo-shik",
                "You have a gentle atmosphere like Jung Hae-in",
            ],
            "celeb_ref": "Cha Eun-woo, Choi Woo-shik, Jung Hae-in",
        },
        "tetowoman": {
            "title": "Teto Woman",
            "description": "Lively and glamorous charm! You have a bright and colorful energy that draws attention.",
            "traits": ["Lively", "Glamorous", "Charming", "Bold", "Vibrant"],
            "fun_facts": [
                "Black & white intensity stands out like Song Hye-kyo",
                "Y2K glamour suits you like Lee Hyori",
                "Lively colors are charming like Suzy",
            ],
            "celeb_ref": "Song Hye-kyo, Lee Hyori, Suzy",
        },
        "egenwoman": {
            "title": "Egen Woman",
            "description": "Natural and elegant atmosphere! You have a soft and graceful charm that brings comfort to others.",
            "traits": ["Natural", "Elegant", "Soft", "Graceful", "Gentle"],
            "fun_facts": [
                "Basic naturalness is charming like Park Bo-young",
                "You have doll-like softness like Jang Won-young",
                "Graceful elegance stands out like Kim Tae-hee",
            ],
            "celeb_ref": "Park Bo-young, Jang Won-young, Kim Tae-hee",
        },
    },
}

NOT_PORTRAIT_MESSAGES: Dict[str, List[str]] = {
    "ko": [
        "어? 이건 사람이 아니네요! 🤔 AI가 당황했어요. 본인 얼굴이 나온 사진을 올려주세요!",
        "앗! 풍경이나 음식 사진은 성격을 알 수 없어요 😅 사람 얼굴이 보이는 사진으로 다시 시도해주세요!",
        "이런! 강아지나 고양이는 분석할 수 없어요 🐱 사람 얼굴 사진을 업로드해주세요!",
        "음... 이 사진에선 얼굴을 찾을 수 없네요 🔍 셀카나 프로필 사진으로 다시 도전해보세요!",
        "어머! 사물이나 풍경은 성격이 없답니다 😄 사람이 나온 사진을 올려주세요!",
        "앗! 메일링 이미지나 로고는 분석할 수 없어요 📧 진짜 사람 얼굴 사진을 올려주세요!",
        "어라? AI가 얼굴을 못 찾겠다고 하네요 🫤 더 선명한 인물 사진으로 다시 시도해보세요!",
        "이건 뭔가 이상해요... 🧐 사람 얼굴이 크게 나온 사진을 업로드해주세요!",
        "음! 얼굴이나 상반신이 나온 사진이 필요해요 📸 전신샷은 얼굴이 너무 작아서 정확한 분석이 어려워요!",
        "어! 더 가까운 사진이 필요해요 🎯 얼굴이 선명하게 보이는 프로필이나 상반신 사진을 올려주세요!",
    ],
    "en": [
        "Oops! This isn't a person! 🤔 AI is confused. Please upload a photo with your face!",
        "Ah! We can't analyze landscapes or food photos 😅 Please try again with a portrait photo!",
        "Hmm! We need a close-up or half-body shot 📸 Full-body photos make faces too small to analyze accurately!",
        "Hey! For better results, please upload a portrait or upper-body photo 🎯 Your face should be clearly visible!",
        "Oh no! We can't analyze dogs or cats 🐱 Please upload a human face photo!",
        "Hmm... We can't find a face in this photo 🔍 Try a selfie or profile picture!",
        "Oh my! Objects and landscapes don't have personalities 😄 Please upload a photo with a person!",
        "Oops! We can't analyze mailing images or logos 📧 Please upload a real human face photo!",
        "Hmm? AI can't find a face here 🫤 Try again with a clearer portrait photo!",
        "This looks suspicious... 🧐 Please upload a photo with a person's face clearly visible!",
    ],
}


def normalize_language(language: Optional[str]) -> Language:
    """Unknown or missing languages fall back to Korean."""
    value = (language or "").strip().lower()
    return value if value in CATEGORY_COPY else DEFAULT_LANGUAGE  # type: ignore[return-value]


def resolve_content(category: str, language: Optional[str] = None) -> CategoryContent:
    """Return the title, description, traits and fun facts for a category."""
    copy = CATEGORY_COPY[normalize_language(language)]
    if category not in copy:
        raise UnknownCategoryError(category)
    return CategoryContent(type=category, **copy[category])


def not_portrait_message(language: Optional[str] = None, rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return rng.choice(NOT_PORTRAIT_MESSAGES[normalize_language(language)])
