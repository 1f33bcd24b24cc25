"""
/**
 * @file smarttranslate/controllers/health_controller.py
 * @description 健康检查控制器。
 */
"""

from fastapi import APIRouter


router = APIRouter()


@router.get("/health")
def health():
    from smarttranslate.config import load_settings

    settings = load_settings()

    api_keys_status = {
        "openai": bool(settings.resolve_openai_key()),
        "elevenlabs": bool(settings.resolve_elevenlabs_key()),
    }
    tts_status = {
        "default_voice": bool(settings.resolve_default_voice()),
    }

    # translation and analysis only need the chat key; speech needs both of the others
    is_healthy = all(api_keys_status.values()) and all(tts_status.values())

    return {
        "status": "ok" if is_healthy else "degraded",
        "checks": {
            "api_keys": api_keys_status,
            "tts": tts_status,
            "model": settings.resolve_openai_model(),
        },
    }
